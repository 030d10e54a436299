"""Steady Habits console entry point.

Renders the habit grid, the summary counters and text versions of the two
charts, then reads commands until the user quits:

    toggle <id> <day>
    add <name> | <category> | <goal>
    delete <id>
    stats | list | theme | help | quit
"""

from __future__ import annotations

import logging
import shlex
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from src.steady import habit_actions
from src.steady.config import settings
from src.steady.models import CATEGORY_LABELS, Habit
from src.steady.period import Period
from src.steady.stats import StatsAggregator

logger = logging.getLogger(__name__)

EXIT_WORDS = {"quit", "exit", "q", "bye"}
HELP_TEXT = "Commands: toggle <id> <day> | add <name> | <category> | <goal> | delete <id> | stats | list | theme | quit"

_THEMES = {
    "light": {"done": "✓", "todo": "·", "bar": "█"},
    "dark": {"done": "●", "todo": "∘", "bar": "▓"},
}


def parse_command(text: str) -> Tuple[Optional[str], Dict[str, Any]]:
    cleaned = (text or "").strip()
    if not cleaned:
        return None, {}
    verb, _, rest = cleaned.partition(" ")
    verb = verb.lower()
    rest = rest.strip()

    if verb in EXIT_WORDS:
        return "quit", {}
    if verb == "add":
        parts = [part.strip() for part in rest.split("|")]
        params: Dict[str, Any] = {"name": parts[0] if parts else ""}
        if len(parts) > 1 and parts[1]:
            params["category"] = parts[1]
        if len(parts) > 2 and parts[2]:
            params["goal"] = parts[2]
        return "add", params
    try:
        args = shlex.split(rest)
    except ValueError:
        args = rest.split()
    if verb in {"toggle", "t"}:
        return "toggle", {"id": args[0] if args else None, "day": args[1] if len(args) > 1 else None}
    if verb in {"delete", "del", "rm"}:
        return "delete", {"id": args[0] if args else None}
    if verb in {"stats", "list", "theme", "help"}:
        return verb, {}
    return "unknown", {"text": cleaned}


def render_table(habits: Sequence[Habit], period: Period, stats: StatsAggregator, theme: str = "light") -> str:
    glyphs = _THEMES.get(theme, _THEMES["light"])
    name_width = max([len(h.name) for h in habits] + [len("Habit")])
    header = f"{'ID':>14} {'Habit':<{name_width}} {'Progress':>8} "
    # Today's column is marked with a leading bracket.
    header += "".join(
        (f"[{day}" if period.is_today(day - 1) else str(day)).rjust(3) for day in period.day_numbers()
    )
    lines = [header]
    for habit in habits:
        done, goal, _ = stats.goal_progress(habit)
        row = f"{habit.id:>14} {habit.name:<{name_width}} {f'{done}/{goal}':>8} "
        row += "".join(f"{glyphs['done'] if cell else glyphs['todo']:>3}" for cell in habit.history)
        lines.append(row)
    if not habits:
        lines.append("  (no habits yet, try: add Stretch | Health | 20)")
    return "\n".join(lines)


def render_bars(labels: Sequence[Any], values: Sequence[float], *, scale: float, width: int = 30, theme: str = "light") -> List[str]:
    bar = _THEMES.get(theme, _THEMES["light"])["bar"]
    label_width = max([len(str(label)) for label in labels] + [1])
    lines = []
    for label, value in zip(labels, values):
        filled = int(round(value / scale * width)) if scale > 0 else 0
        lines.append(f"{str(label):>{label_width}} {bar * filled:<{width}} {value:.0f}")
    return lines


def render_summary(stats: StatsAggregator) -> str:
    summary = stats.summary()
    return (
        f"Global progress: {summary['global_progress']}%   "
        f"Completed today: {summary['completed_today']}/{summary['total_habits']}   "
        f"Best streak: {summary['best_streak']}"
    )


def render_dashboard(habits: Sequence[Habit], period: Period, stats: StatsAggregator, theme: str = "light") -> str:
    parts = [
        period.label(),
        render_summary(stats),
        "",
        render_table(habits, period, stats, theme),
        "",
        "Daily completion %",
        *render_bars(period.day_numbers(), stats.progress_series(), scale=100, theme=theme),
        "",
        "Completions by category",
    ]
    categories = stats.category_series()
    parts.extend(render_bars(CATEGORY_LABELS, categories, scale=max(categories + [1]), theme=theme))
    return "\n".join(parts)


_ACTIONS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "toggle": habit_actions.habit_toggle_action,
    "add": habit_actions.habit_add_action,
    "delete": habit_actions.habit_delete_action,
    "stats": habit_actions.habit_stats_action,
    "list": habit_actions.habit_list_action,
    "theme": habit_actions.theme_toggle_action,
}


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except (EOFError, KeyboardInterrupt):
        return False
    return answer.strip().lower() in {"y", "yes"}


def process_command(text: str, confirm: Callable[[str], bool] = _confirm) -> Optional[Dict[str, Any]]:
    action, params = parse_command(text)
    if action is None:
        return None
    if action == "quit":
        return {"ok": True, "say": "Goodbye!"}
    if action == "help":
        return {"ok": True, "say": HELP_TEXT}
    if action == "unknown":
        return {"ok": False, "say": f"Unknown command: {params['text']}. {HELP_TEXT}"}
    if action == "delete" and not confirm("Are you sure you want to delete this habit?"):
        return {"ok": False, "say": "Delete cancelled."}
    logger.debug("Running %s with %s", action, params)
    return _ACTIONS[action](params)


def _current_theme() -> str:
    return "dark" if habit_actions.get_theme().is_dark() else "light"


def _show_dashboard() -> None:
    store = habit_actions.get_store()
    print(render_dashboard(store.habits, store.period, habit_actions.get_stats(), _current_theme()))


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info("Using state file %s", habit_actions.STORAGE_PATH)

    print("=" * 60)
    print("Steady Habits")
    print(HELP_TEXT)
    print("=" * 60)
    _show_dashboard()

    while True:
        try:
            user_text = input("\n> ")
        except (EOFError, KeyboardInterrupt):
            print()
            break
        action, _ = parse_command(user_text)
        if action == "quit":
            break
        result = process_command(user_text)
        if result is None:
            continue
        print(result["say"])
        if result.get("ok") and action in {"toggle", "add", "delete", "theme"}:
            _show_dashboard()

    print("\nGoodbye!")
    logger.info("Steady Habits shutdown complete")


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    main()
