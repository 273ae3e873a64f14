"""Teamwork Projects resource families, one module per entity."""

from . import (
    comment,
    company,
    milestone,
    project,
    project_member,
    rates,
    tag,
    task,
    tasklist,
    team,
    timelog,
    user,
)

__all__ = [
    "comment",
    "company",
    "milestone",
    "project",
    "project_member",
    "rates",
    "tag",
    "task",
    "tasklist",
    "team",
    "timelog",
    "user",
]
