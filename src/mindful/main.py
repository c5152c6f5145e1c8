"""
Mindful - CLI Entry Point.

Usage:
    mindful onboard          Walk through onboarding in the terminal
    mindful options          Show onboarding form options
    mindful health           Check configuration
    mindful --help           Show help
"""

import logging

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from onboarding.assessment import ASSESSMENT_QUESTIONS, MAX_RATING, MIN_RATING
from onboarding.coordinator import OnboardingCoordinator
from onboarding.forms import get_form_options
from onboarding.state import AuthMode, MemoryPreference, OnboardingStep

app = typer.Typer(
    name="mindful",
    help="Mindful - first-run onboarding for your wellness companion.",
    add_completion=False,
)
console = Console()


@app.command()
def onboard() -> None:
    """Run the onboarding flow interactively."""
    from mindful.config import settings

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    coordinator = OnboardingCoordinator(bcrypt_rounds=settings.bcrypt_rounds)
    console.print(f"[dim]Design: {settings.onboarding_design}[/dim]")

    try:
        while not coordinator.is_complete:
            step = coordinator.current_step
            if step == OnboardingStep.WELCOME:
                _welcome_step()
            elif step == OnboardingStep.AUTHENTICATION:
                _authentication_step(coordinator)
            elif step == OnboardingStep.EMOTIONAL_ASSESSMENT:
                _assessment_step(coordinator)
            elif step == OnboardingStep.MEMORY_PREFERENCE:
                _memory_step(coordinator)
            elif step == OnboardingStep.PRIVACY_CONSENT:
                _privacy_step(coordinator)

            result = coordinator.advance()
            if not result:
                for error in result.errors:
                    console.print(f"[red]{error}[/red]")
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[dim]Onboarding interrupted. Nothing was saved.[/dim]")
        raise typer.Exit(code=1)

    console.print(Panel.fit("[bold green]Onboarding complete![/bold green]", border_style="green"))
    console.print_json(coordinator.build_payload().to_json())


def _welcome_step() -> None:
    console.print(
        Panel.fit(
            "[bold]MindfulTherapy[/bold]\n"
            "A gentle companion for your wellness journey.\n\n"
            "[dim]Safe - Private - Always here for you[/dim]",
            title="Welcome",
            border_style="green",
        )
    )
    console.input("[bold blue]Press Enter to begin[/bold blue] ")


def _authentication_step(coordinator: OnboardingCoordinator) -> None:
    answer = console.input("\nDo you have an account? [dim](y/N)[/dim] ").strip().lower()
    mode = AuthMode.SIGN_IN if answer in ("y", "yes") else AuthMode.SIGN_UP

    email = console.input("[bold]Email:[/bold] ").strip()
    password = console.input("[bold]Password:[/bold] ", password=True)
    confirmation = ""
    if mode == AuthMode.SIGN_UP:
        confirmation = console.input("[bold]Confirm password:[/bold] ", password=True)

    coordinator.set_credentials(email, password, confirmation, mode=mode)


def _assessment_step(coordinator: OnboardingCoordinator) -> None:
    assessment = coordinator.state.assessment
    console.print("\n[bold]Getting to know you[/bold] [dim](type 's' to skip a question)[/dim]")

    while not assessment.is_finished:
        index = assessment.current_question
        if assessment.visited[index]:
            # Pointer stops on the last question; jump to whatever is left
            index = assessment.unanswered_questions()[0]
        question = ASSESSMENT_QUESTIONS[index]

        console.print(f"\n[dim]Question {index + 1} of {len(ASSESSMENT_QUESTIONS)}[/dim]")
        console.print(f"[bold]{question.question}[/bold]")
        if question.subtitle:
            console.print(f"[dim]{question.subtitle}[/dim]")
        for rating, label in enumerate(question.rating_labels, start=MIN_RATING):
            console.print(f"  {rating}. {label}")

        raw = console.input(f"Rating ({MIN_RATING}-{MAX_RATING}): ").strip().lower()
        if raw in ("s", "skip"):
            coordinator.skip_question(index)
            continue
        try:
            rating = int(raw)
            if index == assessment.current_question:
                coordinator.answer_current_question(rating)
            else:
                coordinator.set_response(index, rating)
        except ValueError:
            console.print(f"[red]Please enter a number from {MIN_RATING} to {MAX_RATING}, or 's' to skip.[/red]")


def _memory_step(coordinator: OnboardingCoordinator) -> None:
    options = list(MemoryPreference)
    current = coordinator.state.memory_preference

    console.print("\n[bold]How long should we remember your conversations?[/bold]")
    for i, pref in enumerate(options, start=1):
        marker = "[green]*[/green]" if pref == current else " "
        console.print(f" {marker} {i}. {pref.display_name} [dim]- {pref.description}[/dim]")

    raw = console.input(f"Choice [dim](Enter keeps {current.display_name})[/dim]: ").strip()
    if not raw:
        return
    try:
        coordinator.set_memory_preference(options[int(raw) - 1])
    except (ValueError, IndexError):
        console.print(f"[yellow]Unknown option '{raw}', keeping {current.display_name}.[/yellow]")


def _privacy_step(coordinator: OnboardingCoordinator) -> None:
    console.print("\n[bold]Privacy & Permissions[/bold]")
    notify = console.input("Allow gentle reminders and check-ins? [dim](y/N)[/dim] ").strip().lower()
    coordinator.set_notifications(notify in ("y", "yes"))

    accept = console.input(
        "I agree to the Terms of Service and Privacy Policy [dim](y/N)[/dim] "
    ).strip().lower()
    coordinator.set_privacy_consent(accept in ("y", "yes"))


@app.command()
def options() -> None:
    """Show the options each onboarding form offers."""
    opts = get_form_options()

    table = Table(title="Assessment Questions")
    table.add_column("#", justify="right")
    table.add_column("Question")
    table.add_column("Ratings", style="dim")
    for q in opts["assessment_questions"]:
        table.add_row(str(q["index"] + 1), q["question"], " / ".join(q["rating_labels"]))
    console.print(table)

    table = Table(title="Memory Preferences")
    table.add_column("ID")
    table.add_column("Label")
    table.add_column("Retention (days)", justify="right")
    for p in opts["memory_preferences"]:
        label = p["label"]
        if p["id"] == opts["default_memory_preference"]:
            label += " (default)"
        table.add_row(p["id"], label, str(p["retention_days"]))
    console.print(table)

    designs = ", ".join(d["label"] for d in opts["design_variants"])
    console.print(f"\n[bold]Design variants:[/bold] {designs}")


@app.command()
def health() -> None:
    """Check system health and configuration."""
    from mindful.config import get_settings

    console.print("\n[bold]Mindful Health Check[/bold]\n")

    try:
        settings = get_settings()
        console.print("[green]OK[/green] Configuration loaded")
        console.print(f"   Environment: {settings.mindful_env}")
        console.print(f"   Log level: {settings.log_level}")
        console.print(f"   Onboarding design: {settings.onboarding_design}")
        console.print(f"   Session expiry: {settings.session_expire_hours}h")
        if settings.is_production and settings.bcrypt_rounds < 12:
            console.print(f"[yellow]WARN[/yellow] bcrypt rounds ({settings.bcrypt_rounds}) below 12 in production")
        else:
            console.print(f"[green]OK[/green] bcrypt rounds: {settings.bcrypt_rounds}")
    except Exception as e:
        console.print(f"[red]FAIL[/red] Configuration error: {e}")
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
