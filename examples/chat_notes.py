from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from hashy_ai import APIKeys, ChatMessage, NoteToolContext, Role, Settings, send_message
from hashy_ai.errors import AIError
from hashy_ai.storage import scan_notes

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


def print_progress(text: str) -> None:
    print(f"  {text}")


async def chat(directory: Path, model: str, prompt: str) -> None:
    """
    Ask *model* something about the notes in *directory*.

    Keys come from the environment (or a ``.env`` file); notes the model
    creates are written to *directory*.
    """
    files = tuple(scan_notes(directory))
    context = NoteToolContext(documents_directory=directory, files=files)

    try:
        result = await send_message(
            APIKeys.from_env(),
            model,
            [ChatMessage(Role.USER, prompt)],
            None,
            context,
            print_progress,
            settings=Settings.from_env(),
        )
    except AIError as exc:
        logger.error("Conversation failed: %s", exc)
        return

    print(result.text)
    for path in result.created_notes:
        logger.info("Created %s", path)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("directory", type=Path, help="Folder of markdown notes")
    parser.add_argument("prompt")
    parser.add_argument(
        "--model",
        default="google/gemini-2.5-flash",  # "gpt-5-mini", "claude-haiku-4-5"
    )
    args = parser.parse_args()

    asyncio.run(chat(args.directory, args.model, args.prompt))
