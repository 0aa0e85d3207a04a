"""Composition of the task store and the translation client.

The store and the client know nothing of each other; this is where a
caller translates tasks and writes the results back onto them.
"""

import asyncio
from typing import Iterable

from todo_lingo.logging import Loggers
from todo_lingo.tasks.store import TaskStore
from todo_lingo.translation.client import TranslationClient

logger = Loggers.translation()


async def translate_tasks(
    store: TaskStore,
    client: TranslationClient,
    target_lang: str,
    source_lang: str = "en",
    task_ids: Iterable[str] | None = None,
) -> dict[str, str]:
    """Translate tasks concurrently and annotate each task with the result.

    Requests run independently; a task deleted while its translation was
    in flight is simply skipped when annotating.

    Args:
        store: Store holding the tasks.
        client: Translation client.
        target_lang: Language to translate into.
        source_lang: Language the tasks are written in.
        task_ids: Restrict to these tasks (default: every task).

    Returns:
        Mapping of task id to translated text for tasks still in the store.
    """
    tasks = store.tasks
    if task_ids is not None:
        wanted = set(task_ids)
        tasks = [task for task in tasks if task.id in wanted]
    if not tasks:
        return {}

    translations = await asyncio.gather(
        *(client.translate(task.text, source_lang, target_lang) for task in tasks)
    )

    results: dict[str, str] = {}
    for task, translated in zip(tasks, translations):
        if store.get(task.id) is None:
            continue
        store.annotate_translation(task.id, target_lang, translated)
        results[task.id] = translated

    logger.info("tasks_translated", count=len(results), target_lang=target_lang)
    return results
