"""
Animal compatibility rules.

Compatibility is expressed as a table of declarative rules rather than as
branching code. Each rule states that animals matching a subject trait must
not share an aviary with animals matching an object trait. A symmetric rule
applies whichever of the two animals is the subject.

The default table:
- Lion and Tiger, Wolf and Bear (predator rivalry)
- Eagle and Parrot, Owl and Crow (bird rivalry)
- Snake with any mammal or bird
- A Piranha with any fish
- Amphibians with insects
- Arachnids towards insects, amphibians and fish (one direction only)

Species names are matched exactly, categories by enum member.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

from .enums import AnimalCategory
from .models import Animal


@dataclass(frozen=True)
class Trait:
    """
    Matcher over an animal's species and category.

    An animal matches when every constraint that is set holds. A trait with
    neither constraint set matches every animal.

    Attributes:
        species: Accepted species names, or None for any species
        categories: Accepted categories, or None for any category
    """

    species: Optional[FrozenSet[str]] = None
    categories: Optional[FrozenSet[AnimalCategory]] = None

    def matches(self, animal: Animal) -> bool:
        if self.species is not None and animal.species not in self.species:
            return False
        if self.categories is not None and animal.category not in self.categories:
            return False
        return True


def species(*names: str) -> Trait:
    """Trait matching any of the given species."""
    return Trait(species=frozenset(names))


def category(*categories: AnimalCategory) -> Trait:
    """Trait matching any of the given categories."""
    return Trait(categories=frozenset(categories))


@dataclass(frozen=True)
class CompatibilityRule:
    """
    A single incompatibility between two traits.

    Attributes:
        name: Short label used in log messages
        subject: Trait of the animal the rule is evaluated for
        object: Trait of the other animal
        symmetric: Whether the rule also applies with the roles swapped
    """

    name: str
    subject: Trait
    object: Trait
    symmetric: bool = True

    def forbids(self, first: Animal, second: Animal) -> bool:
        """Check whether the rule forbids first living with second."""
        if self.subject.matches(first) and self.object.matches(second):
            return True
        return self.symmetric and self.subject.matches(second) and self.object.matches(first)


DEFAULT_RULES: Tuple[CompatibilityRule, ...] = (
    CompatibilityRule("predator rivalry", species("Lion"), species("Tiger")),
    CompatibilityRule("predator rivalry", species("Wolf"), species("Bear")),
    CompatibilityRule("bird rivalry", species("Eagle"), species("Parrot")),
    CompatibilityRule("bird rivalry", species("Owl"), species("Crow")),
    CompatibilityRule(
        "reptile vs mammal or bird",
        species("Snake"),
        category(AnimalCategory.MAMMAL, AnimalCategory.BIRD),
    ),
    CompatibilityRule(
        "aggressive fish",
        Trait(species=frozenset({"Piranha"}), categories=frozenset({AnimalCategory.FISH})),
        category(AnimalCategory.FISH),
    ),
    CompatibilityRule(
        "amphibian vs insect",
        category(AnimalCategory.AMPHIBIAN),
        category(AnimalCategory.INSECT),
    ),
    CompatibilityRule(
        "arachnid vs small species",
        category(AnimalCategory.ARACHNID),
        category(AnimalCategory.INSECT, AnimalCategory.AMPHIBIAN, AnimalCategory.FISH),
        symmetric=False,
    ),
)


def find_conflict(
    first: Animal, second: Animal, rules: Iterable[CompatibilityRule] = DEFAULT_RULES
) -> Optional[CompatibilityRule]:
    """Return the first rule forbidding first to live with second, if any."""
    for rule in rules:
        if rule.forbids(first, second):
            return rule
    return None


def is_compatible(
    first: Animal, second: Animal, rules: Sequence[CompatibilityRule] = DEFAULT_RULES
) -> bool:
    """
    Check compatibility with first as the subject.

    One-directional rules only fire when first matches their subject trait, so
    is_compatible(spider, fish) is False while is_compatible(fish, spider) is
    True. Use are_compatible() for the check admission relies on.
    """
    return find_conflict(first, second, rules) is None


def are_compatible(
    first: Animal, second: Animal, rules: Sequence[CompatibilityRule] = DEFAULT_RULES
) -> bool:
    """Check compatibility in both directions."""
    return is_compatible(first, second, rules) and is_compatible(second, first, rules)
