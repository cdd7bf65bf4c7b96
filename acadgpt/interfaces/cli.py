#!/usr/bin/env python3
"""
CLI Interface - Interactive command-line assistant.

This module provides a terminal interface for the AcadGPT assistant.
It supports:
- Free-form questions (files, assignment submission, roll numbers, textbook Q&A)
- Uploading a marksheet or notes (/upload)
- Picking a textbook subject (/subject)
- SGPA breakdown of the uploaded marksheet (/sgpa)
- Library and textbook status (/files, /books)

Run with:
    python -m acadgpt
"""

import logging
from pathlib import Path

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from acadgpt.errors import AcadGPTError
from acadgpt.grading.sgpa import extract_subject_records
from acadgpt.log import configure_logging
from acadgpt.rag.assistant import AcademicAssistant, build_assistant

console = Console()


def print_welcome():
    """Print welcome message and instructions."""
    welcome_text = """
[bold blue]Welcome to AcadGPT![/bold blue]

Ask me about your courses, or:

• [cyan]Download files[/cyan] - "download OS.pdf", "list available files"
• [cyan]Submit assignments[/cyan] - "my reg no is 21BCE1234"
• [cyan]Check CGPA[/cyan] - "what is the CGPA of roll no 42?"
• [cyan]Calculate SGPA[/cyan] - /upload your marksheet, then ask "what is my SGPA?"

[dim]Type /help for all commands[/dim]
"""
    console.print(Panel(welcome_text, border_style="blue"))


def print_help():
    """Print help message with available commands."""
    table = Table(title="Available Commands", show_header=True, header_style="bold cyan")
    table.add_column("Command", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Example", style="dim")

    commands = [
        ("(any question)", "Ask the assistant", "What is paging?"),
        ("/subject <name>", "Answer from a textbook", "/subject Operating Systems"),
        ("/subject", "Stop using a textbook", "/subject"),
        ("/upload <path>", "Upload a PDF or image", "/upload marksheet.pdf"),
        ("/sgpa", "Show subjects found in the upload", "/sgpa"),
        ("/files", "Show library files", "/files"),
        ("/books", "Show textbook status", "/books"),
        ("/clear", "Clear the screen", "/clear"),
        ("/help", "Show this help message", "/help"),
        ("/exit", "Exit the assistant", "/exit"),
    ]

    for cmd, desc, example in commands:
        table.add_row(cmd, desc, example)

    console.print(table)


def parse_command(user_input: str) -> tuple[str, str]:
    """
    Parse user input into command and argument text.

    Returns:
        Tuple of (command, argument)
        For regular questions, command is 'ask'
    """
    user_input = user_input.strip()

    if not user_input:
        return ("empty", "")

    if user_input.startswith("/"):
        parts = user_input[1:].split(maxsplit=1)
        command = parts[0].lower() if parts else ""
        argument = parts[1].strip() if len(parts) > 1 else ""
        return (command, argument)

    return ("ask", user_input)


def handle_ask(assistant: AcademicAssistant, question: str, subject: str | None):
    with console.status("[bold green]Thinking...", spinner="dots"):
        answer = assistant.answer(question, subject)

    console.print("\n[bold green]🎓 AcadGPT:[/bold green]")
    console.print(Markdown(answer.answer))
    if answer.download_url:
        console.print(f"[cyan]⬇  {answer.file_name}: {answer.download_url}[/cyan]")


def handle_upload(assistant: AcademicAssistant, argument: str):
    if not argument:
        console.print("[yellow]Usage: /upload <path>[/yellow]")
        return

    path = Path(argument).expanduser()
    if not path.is_file():
        console.print(f"[red]File not found: {path}[/red]")
        return

    with console.status(f"[bold green]Reading {path.name}...", spinner="dots"):
        fmt = assistant.ingest_document(path.read_bytes(), path.name)

    console.print(f"[green]✓ Processed {path.name} ({fmt.value})[/green]")


def handle_subject(assistant: AcademicAssistant, argument: str) -> str | None:
    if not argument:
        console.print("[dim]Textbook subject cleared[/dim]")
        return None

    match = next(
        (s for s in assistant.textbooks.subjects if s.lower() == argument.lower()),
        None,
    )
    if match is None:
        console.print(f"[yellow]Unknown subject. Choose from: {', '.join(assistant.textbooks.subjects)}[/yellow]")
        return None
    if not assistant.textbooks.has_content(match):
        console.print(f"[yellow]{match} textbook is not loaded; answers won't be checked against it.[/yellow]")

    console.print(f"[green]Subject set to {match}[/green]")
    return match


def handle_sgpa(assistant: AcademicAssistant):
    records = extract_subject_records(assistant.contexts.get())
    if not records:
        console.print("[yellow]No subject records found. Upload a marksheet first.[/yellow]")
        return

    table = Table(title="Detected Subjects", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim")
    table.add_column("Credit", style="white")
    table.add_column("Grade Point", style="white")
    table.add_column("Credit Point", style="green")

    for i, record in enumerate(records, 1):
        table.add_row(str(i), str(record.credit), f"{record.grade_point:.2f}", f"{record.credit_point:g}")

    console.print(table)


def handle_files(assistant: AcademicAssistant):
    files = assistant.library.scan()
    if not files:
        console.print("[yellow]No files in the library folder.[/yellow]")
        return

    table = Table(title="Library Files", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Size (KB)", style="green", justify="right")
    for entry in files:
        table.add_row(entry.name, entry.size_kb)
    console.print(table)


def handle_books(assistant: AcademicAssistant):
    table = Table(title="Textbooks", show_header=True, header_style="bold cyan")
    table.add_column("Subject", style="white")
    table.add_column("Loaded", style="green")
    table.add_column("Characters", justify="right")
    for subject, status in assistant.textbooks.status().items():
        loaded = "✓" if status["loaded"] else "[red]✗[/red]"
        table.add_row(subject, loaded, str(status["length"]))
    console.print(table)


def main():
    """Main CLI loop."""
    configure_logging(logging.WARNING)
    print_welcome()

    try:
        with console.status("[bold green]Loading library...", spinner="dots"):
            assistant = build_assistant()
    except Exception as e:
        console.print(f"[red]Error initializing: {e}[/red]")
        return

    loaded = assistant.textbooks.loaded_subjects()
    console.print(f"[dim]📚 {len(assistant.library.files)} files, textbooks: {', '.join(loaded) or 'none'}[/dim]\n")

    subject: str | None = None

    while True:
        try:
            label = f"You ({subject})" if subject else "You"
            user_input = Prompt.ask(f"[bold cyan]{label}[/bold cyan]")

            command, argument = parse_command(user_input)

            if command == "empty":
                continue

            elif command in ("exit", "quit"):
                console.print("\n[bold blue]Goodbye! Keep learning! 📚[/bold blue]")
                break

            elif command == "help":
                print_help()

            elif command == "clear":
                console.clear()
                print_welcome()

            elif command == "subject":
                subject = handle_subject(assistant, argument)

            elif command == "upload":
                handle_upload(assistant, argument)

            elif command == "sgpa":
                handle_sgpa(assistant)

            elif command == "files":
                handle_files(assistant)

            elif command == "books":
                handle_books(assistant)

            elif command == "ask":
                handle_ask(assistant, argument, subject)

            else:
                console.print("[yellow]Unknown command. Type /help for available commands[/yellow]")

            console.print()

        except KeyboardInterrupt:
            console.print("\n\n[bold blue]Goodbye! Keep learning! 📚[/bold blue]")
            break
        except AcadGPTError as e:
            console.print(f"[red]Error: {e}[/red]")
            console.print("[yellow]Make sure Ollama is running: ollama serve[/yellow]")


if __name__ == "__main__":
    main()
