import sys

from loguru import logger

PALETTE = {
    "graph_builder": "green",
    "graph_export": "blue",
}

# Export only reports saves and loads; keep its debug output quiet
LEVEL_PER_COMPONENT = {
    "graph_export": "INFO",
}


def component_filter(record):
    comp = record["extra"].get("component", "")
    min_level = logger.level(LEVEL_PER_COMPONENT.get(comp, "DEBUG")).no
    return record["level"].no >= min_level


def formatter(record):
    comp = record["extra"].get("component", "")
    people = record["extra"].get("people")
    colour = PALETTE.get(comp, "white")

    tag = f"{comp:<15}" if people is None else f"{comp:<15} | n={people:<3}"

    # Markup goes into the returned template; loguru expands it per record.
    return (
        "{time:HH:mm:ss} | "
        f"<{colour}>{tag}</> | "
        "<level>{message}</level>\n"
    )


logger.remove()
logger.add(sys.stderr, format=formatter, filter=component_filter, colorize=True)
