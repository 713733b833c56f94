"""User-invocable history actions."""

from __future__ import annotations

from .models import ActionContext, ActionResult


def go_backward(context: ActionContext) -> ActionResult:
    status = context.manager.go_backward()
    return ActionResult(status="backward", message=str(status))


def go_forward(context: ActionContext) -> ActionResult:
    status = context.manager.go_forward()
    return ActionResult(status="forward", message=str(status))


def clear_history(context: ActionContext) -> ActionResult:
    context.manager.clear()
    return ActionResult(status="cleared", message=str(context.manager.status()))


def display_status(context: ActionContext) -> ActionResult:
    return ActionResult(status="status", message=str(context.manager.status()))


__all__ = ["go_backward", "go_forward", "clear_history", "display_status"]
