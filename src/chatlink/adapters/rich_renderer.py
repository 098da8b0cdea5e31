"""Terminal rendering of messages and their links with rich.

Keeping formatting here keeps the core free of any display concerns; the
renderer only consumes projected runs and message fields.
"""

from __future__ import annotations

from rich.style import Style
from rich.table import Table
from rich.text import Text

from chatlink.core.links import FinalLink, LinkAction
from chatlink.core.models import Message
from chatlink.core.projection import project_runs

LINK_COLOUR = "#66ccff"
ECHO_STYLE = Style(dim=True)


def link_style(link: FinalLink) -> Style:
    """Style for a link run; only external links carry a terminal hyperlink."""

    if link.action == LinkAction.EXTERNAL:
        return Style(color=LINK_COLOUR, underline=True, link=link.url)
    return Style(color=LINK_COLOUR, underline=True)


def render_message(message: Message) -> Text:
    """Render one chat line: timestamp, sender, and linkified content."""

    text = Text()
    timestamp = message.timestamp.astimezone().strftime("%H:%M:%S")
    text.append(f"{timestamp} ", style="dim")

    sender_style = Style(color=message.sender.colour, bold=True) if message.sender.colour else Style(bold=True)
    if message.is_action:
        text.append(f"* {message.sender.username} ", style=sender_style)
    else:
        text.append(f"{message.sender.username}: ", style=sender_style)

    body_style = Style(italic=message.is_action)
    if message.is_action and message.sender.colour:
        body_style += Style(color=message.sender.colour)
    for run in project_runs(message.content, message.links):
        style = body_style + link_style(run.link) if run.link is not None else body_style
        text.append(run.text, style=style)

    if message.is_local_echo:
        text.stylize(ECHO_STYLE)
        text.append(" (sending...)", style="dim italic")
    return text


def render_link_table(message: Message) -> Table:
    """Tabulate a message's links with their spans and actions."""

    table = Table(show_header=True, header_style="bold")
    table.add_column("Span", justify="right")
    table.add_column("Action")
    table.add_column("Argument")
    table.add_column("Display")
    for link in message.links:
        table.add_row(
            f"{link.start}-{link.end}",
            link.action.value,
            link.argument,
            link.display_text,
        )
    return table
