"""Command Line Interface for the zoo graph.

This module provides a non-interactive CLI over a SQLite-backed zoo. Every
invocation loads the zoo from the database, performs one command and exits.

The CLI supports the following commands:
    - aviaries: List aviaries with their occupants and paths
    - animals: List animals and where they live
    - add-aviary: Create an aviary
    - add-path: Connect two aviaries
    - add-animal: Create an unplaced animal
    - admit / evict / move: Change where an animal lives
    - route: Show the shortest (or fewest-hop) route between two aviaries
    - connected: Check whether every aviary can be reached

Aviaries and animals can be referred to by id or by name. The exit status is
0 on success, 1 when the zoo rejects the operation and 2 when the database or
the configuration is unusable.

Example Usage:
    python -m zoograph cli add-aviary Savannah Open 1200 4
    python -m zoograph cli add-animal Leo Lion 5 190 Mammal
    python -m zoograph cli admit Savannah Leo
    python -m zoograph cli route Savannah "Tropical Zone" --hops
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from zoograph.core.exceptions import ConfigurationError, NodeNotFoundError, StorageError
from zoograph.core.models import Animal, Aviary
from zoograph.infrastructure.logging import setup_logging
from zoograph.infrastructure.storage.plugins.sqlite import SqliteRepositories
from zoograph.infrastructure.storage.plugins.sqlite.constants import STORAGEDB
from zoograph.zoo import ZooGraph

DB_ENV_VAR = "ZOOGRAPH_DB"


def get_data_dir() -> str:
    """Get the absolute path to the per-user data directory.

    The directory is 'zoograph' under $XDG_DATA_HOME, which defaults to
    ~/.local/share.

    Returns:
        str: Absolute path to the data directory.
    """
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return str(Path(data_home) / "zoograph")


def default_db_path() -> str:
    """Database path from the environment, or the default file in the data directory."""
    return os.environ.get(DB_ENV_VAR) or os.path.join(get_data_dir(), STORAGEDB)


def open_zoo(db_path: str) -> ZooGraph:
    """Open the database, creating it and its tables if needed, and load the zoo.

    Raises:
        ConfigurationError: If the database directory cannot be created.
        StorageError: If the database cannot be initialized.
    """
    directory = os.path.dirname(os.path.abspath(db_path))
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Unusable database path {db_path}: {e}") from e
    repositories = SqliteRepositories.open(db_path)
    return ZooGraph(*repositories.as_tuple())


def resolve_aviary(zoo: ZooGraph, reference: str) -> Aviary:
    """Find an aviary by id or name.

    Raises:
        NodeNotFoundError: If no aviary matches.
    """
    aviary = zoo.find_aviary(reference)
    if aviary is None:
        raise NodeNotFoundError(f"Aviary '{reference}' not found")
    return aviary


def resolve_animal(zoo: ZooGraph, reference: str) -> Optional[Animal]:
    animal = zoo.animals.get(reference)
    if animal is not None:
        return animal
    return next((a for a in zoo.animals.all() if a.name == reference), None)


def list_aviaries(zoo: ZooGraph) -> None:
    """Display every aviary with its occupants, followed by the paths."""
    print("Aviaries:")
    for aviary in zoo.aviaries():
        print(
            f"- {aviary.name} [{aviary.id}] {aviary.category}, "
            f"{aviary.area} m^2, {aviary.occupancy}/{aviary.capacity}"
        )
        for animal_id in aviary.occupant_ids:
            animal = zoo.animals.get(animal_id)
            print(f"    {animal.name} ({animal.species})")

    print("\nPaths:")
    for path in zoo.paths():
        print(f"- {zoo.aviary_name(path.from_id)} <-> {zoo.aviary_name(path.to_id)} ({path.length} m)")


def list_animals(zoo: ZooGraph) -> None:
    """Display every animal and the aviary it lives in."""
    print("Animals:")
    for animal in zoo.animals.all():
        home = zoo.aviary_name(animal.aviary_id) if animal.aviary_id else "unplaced"
        fed = "fed" if animal.is_fed else "hungry"
        print(
            f"- {animal.name} [{animal.id}] {animal.species} ({animal.category.value}), "
            f"age {animal.age}, {animal.weight} kg, {fed}, {home}"
        )


def show_route(zoo: ZooGraph, from_ref: str, to_ref: str, hops: bool) -> bool:
    start = resolve_aviary(zoo, from_ref)
    end = resolve_aviary(zoo, to_ref)
    result = zoo.route(start.id, end.id, weighted=not hops)
    if not result.found:
        print(f"No route between {start.name} and {end.name}: {result.status.value}")
        return False
    print("Route: " + " -> ".join(zoo.aviary_name(node_id) for node_id in result.nodes))
    print(f"Total distance: {result.total_weight} m")
    return True


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="zoograph", description="Zoo graph CLI")
    parser.add_argument(
        "--db", default=None, help=f"SQLite database file (default: ${DB_ENV_VAR} or $XDG_DATA_HOME/zoograph/{STORAGEDB})"
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("aviaries", help="List aviaries and paths")
    subparsers.add_parser("animals", help="List animals")

    add_aviary = subparsers.add_parser("add-aviary", help="Create an aviary")
    add_aviary.add_argument("name")
    add_aviary.add_argument("category", help="Habitat type")
    add_aviary.add_argument("area", type=float, help="Area in square metres")
    add_aviary.add_argument("capacity", type=int)

    add_path = subparsers.add_parser("add-path", help="Connect two aviaries")
    add_path.add_argument("from_aviary")
    add_path.add_argument("to_aviary")
    add_path.add_argument("length", type=float, help="Length in metres")

    add_animal = subparsers.add_parser("add-animal", help="Create an unplaced animal")
    add_animal.add_argument("name")
    add_animal.add_argument("species")
    add_animal.add_argument("age", type=int)
    add_animal.add_argument("weight", type=float, help="Weight in kilograms")
    add_animal.add_argument("category", help="Mammal, Bird, Reptile, Fish, Amphibian, Insect or Arachnid")

    admit = subparsers.add_parser("admit", help="Place an animal into an aviary")
    admit.add_argument("aviary")
    admit.add_argument("animal")

    evict = subparsers.add_parser("evict", help="Take an animal out of an aviary")
    evict.add_argument("aviary")
    evict.add_argument("animal")

    move = subparsers.add_parser("move", help="Move an animal between aviaries")
    move.add_argument("from_aviary")
    move.add_argument("to_aviary")
    move.add_argument("animal")

    route = subparsers.add_parser("route", help="Find a route between two aviaries")
    route.add_argument("from_aviary")
    route.add_argument("to_aviary")
    route.add_argument("--hops", action="store_true", help="Minimise the number of paths instead of length")

    subparsers.add_parser("connected", help="Check whether every aviary is reachable")

    return parser


def run_command(zoo: ZooGraph, args: argparse.Namespace) -> bool:
    """Execute one parsed command against the zoo.

    Returns:
        bool: Whether the zoo accepted the operation.
    """
    if args.command == "aviaries":
        list_aviaries(zoo)
        return True

    if args.command == "animals":
        list_animals(zoo)
        return True

    if args.command == "add-aviary":
        try:
            aviary = Aviary.create(args.name, args.category, args.area, args.capacity)
        except (ValueError, TypeError) as e:
            print(f"Invalid aviary: {e}")
            return False
        if not zoo.add_aviary(aviary):
            return False
        print(f"Created aviary {aviary.name} [{aviary.id}]")
        return True

    if args.command == "add-path":
        start = resolve_aviary(zoo, args.from_aviary)
        end = resolve_aviary(zoo, args.to_aviary)
        if not zoo.add_path(start.id, end.id, args.length):
            print(f"Could not connect {start.name} and {end.name}")
            return False
        print(f"Connected {start.name} and {end.name} ({args.length} m)")
        return True

    if args.command == "add-animal":
        animal = zoo.animals.create_animal(
            args.name, args.species, args.age, args.weight, args.category
        )
        if animal is None:
            print(f"Could not create animal {args.name}")
            return False
        print(f"Created animal {animal.name} [{animal.id}]")
        return True

    if args.command in ("admit", "evict"):
        aviary = resolve_aviary(zoo, args.aviary)
        animal = resolve_animal(zoo, args.animal)
        if animal is None:
            print(f"Animal '{args.animal}' not found")
            return False
        if args.command == "admit":
            decision = zoo.animals.check(aviary.id, animal.id)
            if not zoo.admit(aviary.id, animal.id):
                print(f"{animal.name} was not admitted to {aviary.name}: {decision.value}")
                return False
            print(f"{animal.name} now lives in {aviary.name}")
            return True
        if not zoo.evict(aviary.id, animal.id):
            print(f"{animal.name} does not live in {aviary.name}")
            return False
        print(f"{animal.name} left {aviary.name}")
        return True

    if args.command == "move":
        source = resolve_aviary(zoo, args.from_aviary)
        target = resolve_aviary(zoo, args.to_aviary)
        animal = resolve_animal(zoo, args.animal)
        if animal is None:
            print(f"Animal '{args.animal}' not found")
            return False
        if not zoo.move(source.id, target.id, animal.id):
            print(f"{animal.name} stays in {source.name}")
            return False
        print(f"{animal.name} moved from {source.name} to {target.name}")
        return True

    if args.command == "route":
        return show_route(zoo, args.from_aviary, args.to_aviary, args.hops)

    if args.command == "connected":
        connected = zoo.is_fully_connected()
        print("All aviaries are connected" if connected else "Some aviaries are unreachable")
        for index, component in enumerate(zoo.components(), start=1):
            names = sorted(zoo.aviary_name(node_id) for node_id in component)
            print(f"  group {index}: {', '.join(names)}")
        return connected

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application.

    Handles command-line argument parsing and executes the requested command.

    Returns:
        int: Process exit status.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        setup_logging(args.log_level)
        zoo = open_zoo(args.db or default_db_path())
        return 0 if run_command(zoo, args) else 1
    except NodeNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    except (ConfigurationError, StorageError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
