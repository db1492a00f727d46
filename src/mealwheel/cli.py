"""Command-line interface for Mealwheel."""

from __future__ import annotations

import json
from typing import Optional

import typer

from mealwheel.config import get_settings
from mealwheel.db.seed import seed_demo_data
from mealwheel.db.users import find_user_id
from mealwheel.grocery.service import GroceryListError, default_service

app = typer.Typer(help="Mealwheel meal-rotation and grocery commands.")


def _user_id(username: str) -> int:
    user_id = find_user_id(username)
    if user_id is None:
        typer.secho(f"Unknown user '{username}'. Run `mealwheel seed` first.", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    return user_id


def _fail(exc: GroceryListError) -> typer.Exit:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


def _echo_json(payload: dict, pretty: bool) -> None:
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.command("grocery-list")
def grocery_list(
    username: str = typer.Argument(..., help="User whose rotation to aggregate."),
    weeks: Optional[str] = typer.Option(None, "--weeks", help="Comma-separated weeks, e.g. 1,3."),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print output JSON."),
) -> None:
    """
    Print the aggregated grocery list as JSON.
    """
    try:
        result = default_service().get_grocery_list(_user_id(username), weeks)
    except GroceryListError as exc:
        raise _fail(exc) from exc
    _echo_json(result.model_dump(mode="json", by_alias=True), pretty)


@app.command()
def check(
    username: str = typer.Argument(...),
    item_key: str = typer.Argument(..., help="Row key, e.g. 'flour' or 'household:dog food'."),
    uncheck: bool = typer.Option(False, "--uncheck", help="Remove the check instead."),
) -> None:
    """Check (or uncheck) a grocery row."""

    try:
        result = default_service().set_grocery_check(_user_id(username), item_key, not uncheck)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="ITEM_KEY") from exc
    except GroceryListError as exc:
        raise _fail(exc) from exc
    _echo_json(result.model_dump(mode="json", by_alias=True), pretty=False)


@app.command("clear-checks")
def clear_checks(username: str = typer.Argument(...)) -> None:
    """Uncheck every grocery row for the user."""

    try:
        result = default_service().clear_grocery_checks(_user_id(username))
    except GroceryListError as exc:
        raise _fail(exc) from exc
    _echo_json(result.model_dump(mode="json"), pretty=False)


@app.command()
def seed() -> None:
    """Create the allow-listed users with sample meals, rotation and household groups."""

    seeded = seed_demo_data(get_settings().allowed_usernames)
    if seeded:
        typer.echo(f"Seeded {len(seeded)} user(s): {', '.join(sorted(seeded))}")
    else:
        typer.echo("Nothing to seed; every user already has meals.")


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the ``mealwheel`` script."""
    app(prog_name="mealwheel", args=argv)


if __name__ == "__main__":
    main()
