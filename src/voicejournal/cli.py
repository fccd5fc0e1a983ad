"""voicejournal CLI - voice journal data layer."""

import asyncio
import json
import logging
import sys

import click

from .capture import CaptureResult
from .config import load_config
from .core.entries import JournalEntry
from .core.profile import ONBOARDING_GOALS
from .core.streaks import local_datetime
from .core.windows import ReflectionWindow
from .ports.authenticator import AuthenticationError
from .ports.key_value import StorageUnavailableError
from .workflows import build_status, open_journal, open_profile, record as record_workflow


def _run(coro):
    """Run a coroutine, turning environment failures into a clean exit."""
    try:
        return asyncio.run(coro)
    except StorageUnavailableError as e:
        click.echo(f"Error: storage unavailable: {e}", err=True)
        sys.exit(1)
    except AuthenticationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _format_entry(entry: JournalEntry, tz) -> str:
    when = local_datetime(entry.timestamp, tz).strftime("%a %b %d %H:%M")
    transcript = entry.transcript if len(entry.transcript) <= 60 else entry.transcript[:57] + "..."
    return f"{when}  {entry.analysis.emoji} {entry.analysis.mood:12} {transcript}  [{entry.id}]"


def _show_entries(entries: list[JournalEntry], as_json: bool, tz, empty_msg: str) -> None:
    """Shared entry display logic."""
    if as_json:
        click.echo(json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False))
        return

    if not entries:
        click.echo(empty_msg)
        return

    for entry in entries:
        click.echo(_format_entry(entry, tz))


@click.group()
@click.version_option(package_name="voicejournal")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """voicejournal - Voice journal CLI."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else getattr(logging, config.log_level),
    )


# ============== Journal ==============


@main.command()
@click.option("--transcript", "-t", default=None, help="Transcript of the recording")
@click.option("--duration", "-d", default=0, type=click.IntRange(min=0), help="Recording length in seconds")
def record(transcript: str | None, duration: int):
    """Save a reflection."""
    config = load_config()
    if transcript is None:
        transcript = click.prompt("What's on your mind?")
    if not transcript.strip():
        click.echo("Error: transcript is empty", err=True)
        sys.exit(1)

    entry = _run(record_workflow(config, CaptureResult(transcript=transcript, duration_seconds=duration)))
    if entry is None:
        click.echo("Error: failed to save reflection", err=True)
        sys.exit(1)

    click.echo(f"✓ Saved reflection {entry.id}")
    click.echo(f"  Mood: {entry.analysis.emoji} {entry.analysis.mood}")
    if entry.analysis.themes:
        click.echo(f"  Themes: {', '.join(entry.analysis.themes)}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--limit", "-n", default=None, type=click.IntRange(min=0), help="Show only the N most recent")
def entries(as_json: bool, limit: int | None):
    """List journal entries, most recent first."""
    config = load_config()
    journal = _run(open_journal(config))
    items = list(journal.entries) if limit is None else journal.get_recent_entries(limit)
    _show_entries(items, as_json, journal.tz, "No entries yet.")


@main.command()
@click.argument("entry_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(entry_id: str, as_json: bool):
    """Show one entry."""
    config = load_config()
    journal = _run(open_journal(config))
    entry = journal.get_entry_by_id(entry_id)

    if entry is None:
        click.echo(f"Error: no entry {entry_id}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(entry.to_dict(), indent=2, ensure_ascii=False))
        return

    when = local_datetime(entry.timestamp, journal.tz)
    analysis = entry.analysis
    click.echo(f"### {when.strftime('%A, %B %d, %Y at %H:%M')}\n")
    click.echo(f"{analysis.emoji} {analysis.mood} ({entry.duration_seconds}s)\n")
    click.echo(entry.transcript)
    if analysis.reflection:
        click.echo(f"\nReflection: {analysis.reflection}")
    if analysis.themes:
        click.echo(f"\nThemes: {', '.join(analysis.themes)}")
    for title, items in (
        ("Wins", analysis.key_moments.wins),
        ("Worries", analysis.key_moments.worries),
        ("Goals", analysis.key_moments.goals),
    ):
        if items:
            click.echo(f"\n{title}:")
            for item in items:
                click.echo(f"  • {item}")
    if entry.echo:
        click.echo(f"\nEcho ({entry.echo.type.value}): {entry.echo.text}")


@main.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def delete(entry_id: str, yes: bool):
    """Delete an entry."""
    config = load_config()
    journal = _run(open_journal(config))

    if journal.get_entry_by_id(entry_id) is None:
        click.echo(f"No entry {entry_id}.")
        return

    if not yes and not click.confirm(f"Delete entry {entry_id}?"):
        click.echo("Kept.")
        return

    if not _run(journal.delete_entry(entry_id)):
        click.echo("Error: failed to delete entry", err=True)
        sys.exit(1)
    click.echo(f"✓ Deleted {entry_id}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def today(as_json: bool):
    """List today's entries."""
    config = load_config()
    journal = _run(open_journal(config))
    _show_entries(journal.get_today_entries(), as_json, journal.tz, "No entries today.")


@main.command()
def streak():
    """Show the current streak."""
    config = load_config()
    journal = _run(open_journal(config))
    days = journal.get_streak_days()
    click.echo(f"🔥 {days} day streak" if days else "No streak yet. Record a reflection today!")


@main.command()
def status():
    """Today's reflections and streak."""
    config = load_config()

    async def _open():
        return await open_journal(config), await open_profile(config)

    journal, profile = _run(_open())
    summary = build_status(journal, profile)

    click.echo(f"Hey {summary.first_name},\n")
    if summary.needs_onboarding:
        click.echo("Finish onboarding with 'voicejournal onboard'.\n")
    if summary.streak:
        click.echo(f"🔥 {summary.streak} day streak")
    click.echo(f"Reflections today: {summary.today_count}")

    for window in ReflectionWindow:
        mark = "✓" if window in summary.completed else " "
        click.echo(f"  [{mark}] {window.label(config.morning_cutoff_hour)}")
    if summary.available:
        click.echo(f"\nReady for your {summary.available.value} reflection.")

    if summary.recent:
        click.echo("\nRecent highlights:")
        for entry in summary.recent:
            click.echo(f"  {_format_entry(entry, journal.tz)}")


# ============== Profile ==============


@main.command()
@click.option("--email", prompt=True, help="Account email")
@click.password_option(confirmation_prompt=False)
def signin(email: str, password: str):
    """Sign in."""
    config = load_config()

    async def _signin():
        profile = await open_profile(config)
        return await profile.sign_in(email, password)

    user = _run(_signin())
    if user is None:
        click.echo("Error: failed to save profile", err=True)
        sys.exit(1)
    click.echo(f"✓ Signed in as {user.email}")


@main.command()
@click.option("--email", prompt=True, help="Account email")
@click.password_option()
def signup(email: str, password: str):
    """Create an account."""
    config = load_config()

    async def _signup():
        profile = await open_profile(config)
        return await profile.sign_up(email, password)

    user = _run(_signup())
    if user is None:
        click.echo("Error: failed to save profile", err=True)
        sys.exit(1)
    click.echo(f"✓ Welcome, {user.email}. Run 'voicejournal onboard' to pick your goals.")


@main.command()
def signout():
    """Sign out and forget the local profile."""
    config = load_config()

    async def _signout():
        profile = await open_profile(config)
        return await profile.sign_out()

    if not _run(_signout()):
        click.echo("Error: failed to sign out", err=True)
        sys.exit(1)
    click.echo("✓ Signed out")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def profile(as_json: bool):
    """Show the signed-in profile."""
    config = load_config()
    store = _run(open_profile(config))
    user = store.user

    if user is None:
        click.echo("Not signed in.")
        return

    if as_json:
        click.echo(json.dumps(user.to_dict(), indent=2, ensure_ascii=False))
        return

    name = " ".join(p for p in (user.first_name, user.last_name) if p) or "(no name)"
    click.echo(f"{name} <{user.email}>")
    click.echo(f"Onboarding: {'done' if user.has_completed_onboarding else 'pending'}")
    if user.onboarding_goals:
        click.echo(f"Goals: {', '.join(user.onboarding_goals)}")
    for label, value in (
        ("Age range", user.age_range),
        ("Life stage", user.life_stage),
        ("Found us via", user.attribution),
    ):
        if value:
            click.echo(f"{label}: {value}")
    if user.current_struggles:
        click.echo(f"Struggles: {', '.join(user.current_struggles)}")


@main.command("update-profile")
@click.option("--first-name", default=None)
@click.option("--last-name", default=None)
@click.option("--attribution", default=None, help="How you heard about us")
@click.option("--age-range", default=None)
@click.option("--life-stage", default=None)
@click.option("--struggle", "struggles", multiple=True, help="Current struggle (repeatable)")
def update_profile(
    first_name: str | None,
    last_name: str | None,
    attribution: str | None,
    age_range: str | None,
    life_stage: str | None,
    struggles: tuple[str, ...],
):
    """Update profile fields."""
    config = load_config()
    updates = {
        k: v
        for k, v in {
            "first_name": first_name,
            "last_name": last_name,
            "attribution": attribution,
            "age_range": age_range,
            "life_stage": life_stage,
        }.items()
        if v is not None
    }
    if struggles:
        updates["current_struggles"] = list(struggles)

    if not updates:
        click.echo("Nothing to update.")
        return

    async def _update():
        store = await open_profile(config)
        if store.user is None:
            return None, False
        return await store.update_user(**updates), True

    user, signed_in = _run(_update())
    if not signed_in:
        click.echo("Not signed in.")
        return
    if user is None:
        click.echo("Error: failed to save profile", err=True)
        sys.exit(1)
    click.echo("✓ Profile updated")


@main.command()
def goals():
    """List onboarding goals."""
    for goal in ONBOARDING_GOALS:
        click.echo(f"{goal.emoji}  {goal.id:18} {goal.title}")


@main.command()
@click.option(
    "--goal",
    "goal_ids",
    multiple=True,
    type=click.Choice([g.id for g in ONBOARDING_GOALS]),
    help="Goal id (repeatable)",
)
def onboard(goal_ids: tuple[str, ...]):
    """Pick your journaling goals and finish onboarding."""
    config = load_config()

    async def _onboard():
        store = await open_profile(config)
        if store.user is None:
            return None, False
        return await store.complete_onboarding(list(goal_ids)), True

    user, signed_in = _run(_onboard())
    if not signed_in:
        click.echo("Not signed in. Run 'voicejournal signup' first.", err=True)
        sys.exit(1)
    if user is None:
        click.echo("Error: failed to save profile", err=True)
        sys.exit(1)
    click.echo(f"✓ Onboarding complete ({len(user.onboarding_goals)} goals)")


if __name__ == "__main__":
    main()
