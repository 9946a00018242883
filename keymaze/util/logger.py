import sys

from loguru import logger

PALETTE = {
    "grid": "cyan",
    "paths": "blue",
    "dependencies": "magenta",
    "search": "green",
    "solver": "yellow",
}

LEVEL_PER_COMPONENT = {
    "paths": "INFO",
    "search": "INFO",
}


def component_filter(record):
    comp = record["extra"].get("component", "")
    min_level = logger.level(LEVEL_PER_COMPONENT.get(comp, "INFO")).no
    return record["level"].no >= min_level


def formatter(record):
    comp = record["extra"].get("component", "")
    colour = PALETTE.get(comp, "white")

    # The tag lives in the *template* that the sink receives,
    # so Loguru will translate it to ANSI codes.
    return (
        "{time:HH:mm:ss} | "
        f"<{colour}>{comp:<12}</> | "
        "<level>{message}</level>\n"
    )


def set_component_level(component: str, level: str) -> None:
    """Change the minimum level shown for one component."""
    LEVEL_PER_COMPONENT[component] = level


def set_verbose() -> None:
    for component in PALETTE:
        set_component_level(component, "DEBUG")


logger.remove()
logger.add(sys.stderr, format=formatter, filter=component_filter, colorize=True)
