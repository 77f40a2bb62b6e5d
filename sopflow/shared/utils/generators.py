"""ID generators (CUID2 for aggregates, positional ids for workflow tasks)."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def task_id_for_position(position: int) -> str:
    """Return the stable task id for a 1-based position (task-001, task-002, ...).

    Ids sort lexicographically in template order up to 999 tasks.
    """
    if position < 1:
        raise ValueError("Task position must be >= 1")
    return f"task-{position:03d}"
