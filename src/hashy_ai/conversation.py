"""
The conversation loop: generate, run requested tools, feed their output back,
until the model answers in plain text or the round budget runs out.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from enum import StrEnum
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional, Protocol, Sequence, Union

from hashy_ai.client import ProviderClient, ProviderResolver
from hashy_ai.config import APIKeys, Settings
from hashy_ai.errors import EmptyResponseError
from hashy_ai.params import generation_params
from hashy_ai.prompt import build_system_prompt
from hashy_ai.storage import NOTE_EXTENSION
from hashy_ai.tools import CreateNoteTool, NoteToolContext, ToolRegistry
from hashy_ai.transcript import build_transcript
from hashy_ai.types import ChatMessage, ChatResult, ToolCallRequest, WireMessage

__all__ = [
    "MAX_ROUNDS",
    "ROUNDS_EXHAUSTED_TEXT",
    "LoopState",
    "ProgressCallback",
    "CreatedNoteTracker",
    "ConversationLoop",
    "send_message",
]

logger = logging.getLogger(__name__)

# In-flight progress notifications, held until they finish
_background_tasks: set[asyncio.Future] = set()

MAX_ROUNDS = 10
ROUNDS_EXHAUSTED_TEXT = "Done."

ProgressCallback = Callable[[str], Union[Awaitable[None], None]]


class LoopState(StrEnum):
    AWAITING_MODEL = "awaiting_model"
    EXECUTING_TOOLS = "executing_tools"
    DONE = "done"
    ROUNDS_EXHAUSTED = "rounds_exhausted"


class Resolver(Protocol):
    def resolve(self, model: str, api_keys: APIKeys) -> ProviderClient: ...


class CreatedNoteTracker:
    """
    Detects notes created by ``create_note`` calls.

    The tool reports the new filename under ``url``; that is used when
    present. Otherwise the note directory is listed and the newest ``.md``
    file that was neither there when tracking started nor already recorded
    is taken. Filenames are ULIDs, so descending name order is newest first.
    Concurrent writers to the directory can fool the fallback.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.created: list[Path] = []
        self._existing = set(self._listing())

    def _listing(self) -> list[Path]:
        try:
            return sorted(self.directory.iterdir(), key=lambda p: p.name, reverse=True)
        except OSError as exc:
            logger.warning("Could not list %s: %s", self.directory, exc)
            return []

    def observe(self, call: ToolCallRequest, output: str) -> Optional[Path]:
        if call.name != CreateNoteTool.name or not isinstance(call.arguments.get("title"), str):
            return None
        payload = _decode(output)
        if isinstance(payload, dict) and "error" in payload:
            return None

        reported = payload.get("url") if isinstance(payload, dict) else None
        if isinstance(reported, str) and reported:
            path = self.directory / reported
            if path.exists() and path not in self.created:
                self.created.append(path)
                return path

        for path in self._listing():
            if path.suffix != NOTE_EXTENSION or path in self._existing:
                continue
            if path not in self.created:
                self.created.append(path)
                return path
        return None


def _decode(output: str) -> Any:
    try:
        return json.loads(output)
    except (TypeError, ValueError):
        return None


def short_model_name(model: str) -> str:
    return model.rsplit("/", 1)[-1]


class ConversationLoop:
    """
    Drives one conversation against one provider.

    Each round makes exactly one ``generate`` call. Tool calls in a response
    run in order and each one's output is appended right after the assistant
    entry that requested it. The loop stops on a plain-text answer, raises
    `EmptyResponseError` on an empty one, and after *max_rounds* rounds of
    tool calls returns ``ROUNDS_EXHAUSTED_TEXT`` with whatever was created.
    """

    def __init__(
        self,
        provider: ProviderClient,
        registry: ToolRegistry,
        *,
        params: dict[str, Any] | None = None,
        documents_directory: Path,
        on_progress: Optional[ProgressCallback] = None,
        max_rounds: int = MAX_ROUNDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self.registry = registry
        self.params = params if params is not None else generation_params(registry)
        self.tracker = CreatedNoteTracker(documents_directory)
        self.on_progress = on_progress
        self.max_rounds = max_rounds
        self.logger = logger or logging.getLogger(__name__)
        self.state = LoopState.AWAITING_MODEL
        self.rounds = 0
        self.transcript: list[WireMessage] = []
        self._notifications: set[asyncio.Future] = set()

    @property
    def pending_notifications(self) -> set[asyncio.Future]:
        return set(self._notifications)

    async def run(self, transcript: Sequence[WireMessage]) -> ChatResult:
        self.transcript = list(transcript)
        self.state = LoopState.AWAITING_MODEL

        while self.rounds < self.max_rounds:
            self.rounds += 1
            self.logger.info("Round %d with %s", self.rounds, self.provider.model)
            result = await self.provider.generate(self.transcript, params=self.params)

            if result.has_tool_calls:
                self.state = LoopState.EXECUTING_TOOLS
                await self._run_tools(result.tool_calls, result.assistant_message())
                self.state = LoopState.AWAITING_MODEL
                continue

            if not result.text:
                raise EmptyResponseError(self.provider.model)

            self.state = LoopState.DONE
            return ChatResult(result.text, tuple(self.tracker.created))

        self.state = LoopState.ROUNDS_EXHAUSTED
        self.logger.warning("Stopped after %d rounds of tool calls", self.rounds)
        return ChatResult(ROUNDS_EXHAUSTED_TEXT, tuple(self.tracker.created))

    async def _run_tools(self, calls: list[ToolCallRequest], assistant: WireMessage) -> None:
        self.transcript.append(assistant)
        outputs = await self.registry.execute(calls)

        for call, output in zip(calls, outputs, strict=True):
            self.tracker.observe(call, output.content)
            self.notify(self._summarize(call))
            self.transcript.append(
                {
                    "role": "tool",
                    "tool_call_id": output.id,
                    "name": call.name,
                    "content": output.content,
                }
            )

    def _summarize(self, call: ToolCallRequest) -> str:
        tool = self.registry.get(call.name)
        if tool is None:
            return f"⚠ {call.name}"
        return tool.summarize(call.arguments)

    def notify(self, message: str) -> None:
        """Hand *message* to the progress callback without waiting for it."""
        if self.on_progress is None:
            return
        try:
            outcome = self.on_progress(message)
        except Exception:
            self.logger.warning("Progress callback failed", exc_info=True)
            return
        if not inspect.isawaitable(outcome):
            return

        task = asyncio.ensure_future(outcome)
        self._notifications.add(task)
        _background_tasks.add(task)
        task.add_done_callback(self._notification_done)

    def _notification_done(self, task: asyncio.Future) -> None:
        self._notifications.discard(task)
        _background_tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.warning("Progress callback failed: %s", task.exception())


async def send_message(
    api_keys: APIKeys,
    model: str,
    messages: Iterable[ChatMessage],
    note_context: Optional[str],
    tool_context: NoteToolContext,
    on_tool_call: Optional[ProgressCallback] = None,
    *,
    resolver: Optional[Resolver] = None,
    registry: Optional[ToolRegistry] = None,
    settings: Optional[Settings] = None,
) -> ChatResult:
    """
    Answer the latest user message, letting the model work on the notes.

    Args:
        api_keys: Keys for every backend; only the routed one must be set.
        model: Model identifier, matched against the catalogs in `models`.
        messages: Chat history, oldest first. Tool entries are not replayed.
        note_context: Text of the currently open note, if any.
        tool_context: Snapshot of the notes the tools operate on.
        on_tool_call: Progress sink, called with short display strings.
        resolver: Routes *model* to a provider client.
        registry: Tools offered to the model. Defaults to every note tool.
        settings: Process-wide settings (enabled backends, default params).

    Raises:
        NoAPIKeyError: The routed backend has no key; nothing was sent.
        EmptyResponseError: The model returned neither text nor tool calls.
        ApiError, ProviderError: The provider request failed.
    """
    settings = settings or Settings()
    resolver = resolver or ProviderResolver(settings)
    registry = registry or ToolRegistry.for_context(tool_context)

    system_prompt = build_system_prompt(
        note_count=len(tool_context.files),
        existing_tags=tool_context.tags,
        current_note_context=note_context,
    )
    transcript = build_transcript(system_prompt, messages)

    provider = resolver.resolve(model, api_keys)
    loop = ConversationLoop(
        provider,
        registry,
        params=generation_params(registry, settings.default_params),
        documents_directory=tool_context.documents_directory,
        on_progress=on_tool_call,
    )
    loop.notify(
        f"→ {short_model_name(model)} · {len(transcript) - 1} messages"
        f" · {len(tool_context.files)} notes"
    )

    try:
        result = await loop.run(transcript)
        logger.info("Conversation finished in state %s", loop.state)
        return result
    finally:
        close = getattr(provider, "aclose", None)
        if close is not None:
            await close()
