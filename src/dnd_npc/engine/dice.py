"""Dice and roll simulation for generated stat blocks.

Expressions are restricted to a signed sum of terms, each a literal
integer or ``NdM``. Terms that do not parse (or name zero dice or
zero-sided dice) contribute nothing; the simulator never raises for a
bad expression. Valid terms are rolled with the d20 library; if d20
rejects the expression as a whole, each term is rolled on its own and
only the failing terms count as zero.

Every call is freshly randomized and returns a RollOutcome whose
``result`` and ``detail`` can be displayed directly.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import d20

from dnd_npc.core.constants import MAX_DICE_ROLLED
from dnd_npc.core.logging import get_logger
from dnd_npc.models.enums import Ability
from dnd_npc.models.npc import NPCRecord, RollPayload


logger = get_logger(__name__)

_TERM_SPLIT = re.compile(r"([+-]?)([^+-]+)")
_DICE_TERM = re.compile(r"^(\d+)d(\d+)$", re.IGNORECASE)
_LITERAL_TERM = re.compile(r"^\d+$")


@dataclass(frozen=True)
class DiceTerm:
    """One signed term of a dice expression.

    Attributes:
        sign: +1 or -1.
        count: Number of dice, or the literal value when ``sides`` is 0.
        sides: Die size; 0 marks a literal term.
    """

    sign: int
    count: int
    sides: int = 0

    @property
    def is_literal(self) -> bool:
        return self.sides == 0

    def render(self) -> str:
        return str(self.count) if self.is_literal else f"{self.count}d{self.sides}"


@dataclass(frozen=True)
class RollOutcome:
    """Result of an on-demand roll.

    Attributes:
        result: Total rolled.
        detail: Human-readable breakdown of the roll.
        natural: The kept d20 face for d20 rolls, else None.
    """

    result: int
    detail: str
    natural: int | None = None

    @property
    def is_critical(self) -> bool:
        return self.natural == 20

    @property
    def is_fumble(self) -> bool:
        return self.natural == 1


def format_signed(value: int) -> str:
    """Render an integer with an explicit sign ('+3', '-1', '+0')."""
    return f"+{value}" if value >= 0 else str(value)


def parse_dice_expression(expression: str | None) -> list[DiceTerm]:
    """Parse an expression into its valid terms.

    Args:
        expression: Expression such as '2d6+1d4-1'.

    Returns:
        Terms that parsed; unparseable or empty terms are dropped.
    """
    compact = re.sub(r"\s+", "", expression or "")
    terms: list[DiceTerm] = []
    for sign_text, body in _TERM_SPLIT.findall(compact):
        sign = -1 if sign_text == "-" else 1
        dice_match = _DICE_TERM.match(body)
        if dice_match:
            count, sides = int(dice_match.group(1)), int(dice_match.group(2))
            if count > 0 and sides > 0:
                terms.append(DiceTerm(sign=sign, count=count, sides=sides))
            continue
        if _LITERAL_TERM.match(body):
            terms.append(DiceTerm(sign=sign, count=int(body)))
            continue
        logger.debug("Ignoring unparseable dice term", term=body, expression=expression)
    return terms


def render_terms(terms: list[DiceTerm]) -> str:
    """Render parsed terms back into a normalised expression."""
    parts: list[str] = []
    for index, term in enumerate(terms):
        if index == 0:
            parts.append(("-" if term.sign < 0 else "") + term.render())
        else:
            parts.append(("- " if term.sign < 0 else "+ ") + term.render())
    return " ".join(parts)


def build_damage_expression(
    damage_dice: str | None,
    bonus_dice: str | None,
    damage_mod: int,
) -> str:
    """Join damage dice, bonus dice and a signed modifier ('2d6+1d6+3').

    With no dice at all only the signed modifier remains.
    """
    dice = "+".join(part for part in (damage_dice, bonus_dice) if part)
    if not dice:
        return format_signed(damage_mod)
    if damage_mod:
        return f"{dice}{format_signed(damage_mod)}"
    return dice


class DiceSimulator:
    """Roller for expressions, attacks, damage, saves and checks.

    Example:
        >>> simulator = DiceSimulator()
        >>> outcome = simulator.roll_expression("2d6+3")
        >>> 5 <= outcome.result <= 15
        True
    """

    def __init__(self, max_rolls: int = MAX_DICE_ROLLED) -> None:
        """Initialize the simulator.

        Args:
            max_rolls: Dice one expression may roll before d20 rejects it.
        """
        self._roller = d20.Roller(context=d20.RollContext(max_rolls=max_rolls))

    def roll_expression(self, expression: str | None) -> RollOutcome:
        """Roll a sum-of-terms expression.

        Args:
            expression: Expression such as '2d6+3'.

        Returns:
            RollOutcome; an expression with no valid terms totals 0.
        """
        terms = parse_dice_expression(expression)
        if not terms:
            return RollOutcome(result=0, detail="0")

        outcome = self._roll(render_terms(terms))
        if outcome is not None:
            return outcome
        return self._roll_terms(terms)

    def roll_dice_expression(self, expression: str | None) -> int:
        """Roll an expression and return only the total."""
        return self.roll_expression(expression).result

    def roll_d20(self, modifier: int) -> RollOutcome:
        """Roll 1d20 plus a flat modifier."""
        sign = "+" if modifier >= 0 else "-"
        outcome = self._roll(f"1d20 {sign} {abs(modifier)}")
        return outcome if outcome is not None else RollOutcome(result=0, detail="0")

    def roll_attack(self, payload: RollPayload | int) -> RollOutcome:
        """Roll an attack from a resolved entry's payload or a bare bonus."""
        bonus = payload.attack_bonus if isinstance(payload, RollPayload) else int(payload)
        return self.roll_d20(bonus)

    def roll_damage(self, payload: RollPayload) -> RollOutcome:
        """Roll damage dice, bonus dice and the flat modifier of a payload."""
        expression = build_damage_expression(
            payload.damage_dice, payload.bonus_dice, payload.damage_mod
        )
        return self.roll_expression(expression)

    def roll_save(self, modifier: int, proficiency_bonus: int = 0, *, proficient: bool = False) -> RollOutcome:
        """Roll a saving throw from raw numbers."""
        return self.roll_d20(modifier + (proficiency_bonus if proficient else 0))

    def roll_saving_throw(self, npc: NPCRecord, ability: Ability | str) -> RollOutcome:
        """Roll one of an NPC's saving throws.

        An ability key the NPC does not have reads as modifier 0.
        """
        key = _parse_ability(ability)
        if key is None:
            return self.roll_save(0)
        return self.roll_save(
            npc.ability_mods.get(key, 0),
            npc.proficiency_bonus,
            proficient=npc.is_proficient(key),
        )

    def roll_ability_check(self, npc: NPCRecord, ability: Ability | str) -> RollOutcome:
        """Roll a plain ability check (d20 + modifier) for an NPC."""
        key = _parse_ability(ability)
        modifier = npc.ability_mods.get(key, 0) if key is not None else 0
        return self.roll_d20(modifier)

    def _roll_terms(self, terms: list[DiceTerm]) -> RollOutcome:
        """Roll terms one at a time; a term d20 rejects contributes 0."""
        total = 0
        details: list[str] = []
        for term in terms:
            if term.is_literal:
                value, detail = term.count, str(term.count)
            else:
                outcome = self._roll(term.render())
                if outcome is None:
                    logger.warning("Dice term degraded to zero", term=term.render())
                    value, detail = 0, f"{term.render()} (0)"
                else:
                    value, detail = outcome.result, outcome.detail
            total += term.sign * value
            if not details:
                details.append(f"-{detail}" if term.sign < 0 else detail)
            else:
                details.append(f"{'-' if term.sign < 0 else '+'} {detail}")
        return RollOutcome(result=total, detail=" ".join(details))

    def _roll(self, expression: str) -> RollOutcome | None:
        try:
            result = self._roller.roll(expression, stringifier=d20.SimpleStringifier())
        except d20.RollError as exc:
            logger.warning("Dice roll failed", expression=expression, error=str(exc))
            return None

        natural = _find_natural_d20(result.expr) if "1d20" in expression else None
        logger.debug("Dice rolled", expression=expression, total=result.total)
        return RollOutcome(result=result.total, detail=str(result), natural=natural)


def _parse_ability(ability: Ability | str) -> Ability | None:
    try:
        return Ability(str(ability).strip().upper())
    except ValueError:
        return None


def _find_natural_d20(node: Any) -> int | None:
    """Find the kept d20 face in a d20 expression tree."""
    if isinstance(node, d20.Dice) and node.size == 20:
        for die in node.values:
            if getattr(die, "kept", True):
                return die.number
    for child in getattr(node, "children", []):
        value = _find_natural_d20(child)
        if value is not None:
            return value
    return None


_simulator = DiceSimulator()


def roll_dice_expression(expression: str | None) -> int:
    """Convenience function returning the total of an expression.

    Example:
        >>> roll_dice_expression("0d1")
        0
    """
    return _simulator.roll_dice_expression(expression)


__all__ = [
    "DiceTerm",
    "RollOutcome",
    "DiceSimulator",
    "format_signed",
    "parse_dice_expression",
    "render_terms",
    "build_damage_expression",
    "roll_dice_expression",
]
