"""
Email rendering with Django templates.

Each template name maps to three files under ``notifications/emails/``:
``<name>_subject.txt``, ``<name>.txt`` and ``<name>.html``.
"""

from dataclasses import dataclass
from typing import Any, Dict

from django.template.loader import render_to_string

TEMPLATE_DIR = "notifications/emails"


@dataclass(frozen=True)
class RenderedEmail:
    subject: str
    text: str
    html: str


def render_email(template: str, data: Dict[str, Any]) -> RenderedEmail:
    """
    Render subject, plain-text and HTML bodies of an email.

    Args:
        template: Template name
        data: Template context

    Returns:
        RenderedEmail
    """
    subject = render_to_string(f"{TEMPLATE_DIR}/{template}_subject.txt", data)
    return RenderedEmail(
        subject=" ".join(subject.split()),
        text=render_to_string(f"{TEMPLATE_DIR}/{template}.txt", data),
        html=render_to_string(f"{TEMPLATE_DIR}/{template}.html", data),
    )
