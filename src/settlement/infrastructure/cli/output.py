"""Shared helpers for command output."""

from __future__ import annotations

import json
import os
from dataclasses import asdict

import click

from settlement.application.access import Caller, Role


def operator() -> Caller:
    """The CLI runs with operator (admin) rights."""
    return Caller(user_id=f"cli:{os.environ.get('USER', 'operator')}", role=Role.ADMIN)


def echo_json(dto) -> None:
    click.echo(json.dumps(asdict(dto), indent=2))
