# screentime_api/cli.py
"""
Command line interface, registered on the Flask CLI:

    flask --app screentime_api.wsgi adjustment-type list --limit 5
    screentime time
"""
from __future__ import annotations

import os
from functools import wraps

import click
from flask.cli import AppGroup, FlaskGroup, with_appcontext

from screentime_api.common.errors import APIError, NotFoundError
from screentime_api.common.parsing import parse_datetime
from screentime_api.extensions import db
from screentime_api.models.time_entry import format_minutes
from screentime_api.services import store
from screentime_api.services.adjusted_time import resolve_adjusted_time
from screentime_api.services.store import AdjustmentQueryFilter

LIMIT = click.IntRange(0, 255)


def _echo_errors(fn):
    """Report store/validation errors as `Error: ...` with exit status 1."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except APIError as e:
            raise click.ClickException(e.message)
    return wrapper


def _table(headers, rows):
    """Render rows as a box-drawn table."""
    cells = [[("" if v is None else str(v)) for v in r] for r in rows]
    widths = [len(h) for h in headers]
    for r in cells:
        widths = [max(w, len(c)) for w, c in zip(widths, r)]

    def line(left, mid, right):
        return left + mid.join("─" * (w + 2) for w in widths) + right

    def row(values):
        return "│" + "│".join(f" {v:<{w}} " for v, w in zip(values, widths)) + "│"

    out = [line("┌", "┬", "┐"), row(headers)]
    if cells:
        out.append(line("├", "┼", "┤"))
        out.extend(row(r) for r in cells)
    out.append(line("└", "┴", "┘"))
    return "\n".join(out)


def _adjustment_type_rows(items):
    return _table(["id", "description", "adjustment"],
                  [(x.id, x.description, x.adjustment) for x in items])


def _adjustment_rows(items):
    return _table(["id", "adjustment_type_id", "created", "comment"],
                  [(a.id, a.adjustment_type_id, a.created, a.comment) for a in items])


def _time_entry_rows(items):
    return _table(["id", "time", "created"],
                  [(t.id, t.time_formatted, t.created) for t in items])


def _iso(ctx, param, value):
    try:
        return parse_datetime(value, param.name)
    except APIError as e:
        raise click.BadParameter(e.message)


# ---------------- adjustment types ----------------

adjustment_type_cli = AppGroup("adjustment-type", help="Commands related to adjustment types.")


@adjustment_type_cli.command("list")
@click.option("-l", "--limit", type=LIMIT, default=None,
              help="The maximum number of adjustment types to return.")
def list_adjustment_types(limit):
    """Lists the available adjustment types."""
    click.echo(_adjustment_type_rows(store.get_adjustment_types(limit)))


@adjustment_type_cli.command("show")
@click.argument("atid", type=int)
@_echo_errors
def show_adjustment_type(atid):
    """Shows the adjustment type with the given ID."""
    x = store.get_adjustment_type(atid)
    if not x:
        raise NotFoundError(f"Adjustment type with ID {atid} not found")
    click.echo(_adjustment_type_rows([x]))


@adjustment_type_cli.command("add")
@click.argument("description")
@click.argument("adjustment", type=click.IntRange(-128, 127))
@_echo_errors
def add_adjustment_type(description, adjustment):
    """Adds an adjustment type worth ADJUSTMENT minutes."""
    x = store.add_adjustment_type(description, adjustment)
    click.echo(f"Added adjustment type {x.id}.")


@adjustment_type_cli.command("delete")
@click.argument("atid", type=int)
@_echo_errors
def delete_adjustment_type(atid):
    """Deletes an adjustment type that no adjustment references."""
    store.delete_adjustment_type(atid)
    click.echo(f"Deleted adjustment type {atid}.")


# ---------------- adjustments ----------------

adjustment_cli = AppGroup("adjustment", help="Commands related to adjustments.")


@adjustment_cli.command("list")
@click.option("-l", "--limit", type=LIMIT, default=None, help="Maximum rows (default 10).")
@click.option("-t", "--type", "atid", type=int, default=None, help="Only this adjustment type.")
@click.option("-s", "--since", callback=_iso, default=None, help="Only adjustments created at or after this ISO timestamp.")
def list_adjustments(limit, atid, since):
    """Lists adjustments, newest first."""
    flt = AdjustmentQueryFilter(limit=limit, adjustment_type_id=atid, since=since)
    click.echo(_adjustment_rows(store.get_adjustments(flt)))


@adjustment_cli.command("add")
@click.argument("atid", type=int)
@click.option("-c", "--comment", default=None)
@click.option("--created", callback=_iso, default=None, help="Backdate to this ISO timestamp.")
@_echo_errors
def add_adjustment(atid, comment, created):
    """Applies the adjustment type ATID."""
    at = store.get_adjustment_type(atid)
    if not at:
        raise NotFoundError(f"Adjustment type with ID {atid} not found")
    a = store.add_adjustment(at, comment=comment, created=created)
    click.echo(f"Added adjustment {a.id} ({at.adjustment:+d}).")


@adjustment_cli.command("delete")
@click.argument("aid", type=int)
@_echo_errors
def delete_adjustment(aid):
    """Deletes the adjustment with the given ID."""
    store.delete_adjustment(aid)
    click.echo(f"Deleted adjustment {aid}.")


# ---------------- time entries ----------------

time_entry_cli = AppGroup("time-entry", help="Commands related to time entries.")


@time_entry_cli.command("list")
@click.option("-l", "--limit", type=LIMIT, default=None, help="Maximum rows (default 10).")
def list_time_entries(limit):
    """Lists time entries, newest first."""
    click.echo(_time_entry_rows(store.get_time_entries(limit)))


@time_entry_cli.command("show")
@click.argument("teid", type=int)
@_echo_errors
def show_time_entry(teid):
    """Shows the time entry with the given ID."""
    t = store.get_time_entry(teid)
    if not t:
        raise NotFoundError(f"Time entry with ID {teid} not found")
    click.echo(_time_entry_rows([t]))


@time_entry_cli.command("add")
@click.argument("minutes", type=click.IntRange(0, 65535))
@click.option("--created", callback=_iso, default=None, help="Backdate to this ISO timestamp.")
@_echo_errors
def add_time_entry(minutes, created):
    """Resets the tracked time to MINUTES."""
    t = store.add_time_entry(minutes, created=created)
    click.echo(f"Added time entry {t.id} ({t.time_formatted}).")


@time_entry_cli.command("delete")
@click.argument("teid", type=int)
@_echo_errors
def delete_time_entry(teid):
    """Deletes the time entry with the given ID."""
    store.delete_time_entry(teid)
    click.echo(f"Deleted time entry {teid}.")


# ---------------- adjusted time / seeding ----------------

@click.command("time")
@with_appcontext
def show_adjusted_time():
    """Prints the current adjusted time as H:MM."""
    click.echo(format_minutes(resolve_adjusted_time()))


@click.command("seed-demo")
@with_appcontext
def seed_demo():
    """Seed a few adjustment types if there are none yet."""
    if store.get_adjustment_types(1):
        click.echo("Adjustment types already exist; nothing to do.")
        return
    for description, delta in (
        ("Chores", 15),
        ("Homework done early", 30),
        ("Late for dinner", -10),
        ("Screen time overrun", -30),
    ):
        store.add_adjustment_type(description, delta)
    click.echo("Seeded 4 adjustment types.")


@click.command("init-db")
@with_appcontext
def init_db_command():
    """Create tables directly (dev/test shortcut for `flask db upgrade`)."""
    db.create_all()
    click.echo("Created tables.")


def register_commands(app):
    app.cli.add_command(adjustment_type_cli)
    app.cli.add_command(adjustment_cli)
    app.cli.add_command(time_entry_cli)
    app.cli.add_command(show_adjusted_time)
    app.cli.add_command(seed_demo)
    app.cli.add_command(init_db_command)


def _set_verbosity(ctx, param, value):
    # read by create_app, which runs after option parsing
    if value:
        os.environ["LOG_LEVEL"] = "DEBUG"
    return value


def _create_app():
    from screentime_api import create_app
    return create_app()


main = FlaskGroup(
    name="screentime",
    create_app=_create_app,
    add_default_commands=True,
    params=[
        click.Option(
            ["-v", "--verbose"], count=True, expose_value=False, is_eager=True,
            callback=_set_verbosity, help="Log at DEBUG level.",
        ),
    ],
    help="Track screen time: time entries plus signed adjustments.",
)
