"""
Greet a person based on their age. Run from project root:
  python -m sessionauth.scripts.say_hello -n NAME -a AGE
Options left out are asked for interactively.
"""
import argparse
import sys
from collections.abc import Callable


def greeting(person_name: str, age: int) -> str:
    if age < 13:
        return f"Hello {person_name}, you're still rather young!"
    if age < 50:
        return f"Hello {person_name}, you're in the prime of your life!"
    return (
        f"Hello {person_name}, getting up there in age, huh? "
        "Well, you're only as young as you feel!"
    )


def parse_age(value: str) -> int:
    try:
        return int(value.strip(), 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid age: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="say_hello", description="Say hello to a person.")
    parser.add_argument("-n", dest="person_name", metavar="personName", help="Name to greet")
    parser.add_argument("-a", dest="age", metavar="age", type=parse_age, help="Age in years")
    return parser


def main(argv: list[str] | None = None, ask: Callable[[str], str] = input) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    person_name = args.person_name
    if not person_name:
        person_name = ask("What is your name? ").strip()
    age = args.age
    if age is None:
        try:
            age = parse_age(ask("How old are you? "))
        except argparse.ArgumentTypeError as e:
            parser.error(str(e))

    print(greeting(person_name, age))
    return 0


if __name__ == "__main__":
    sys.exit(main())
