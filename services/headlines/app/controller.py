# services/headlines/app/controller.py
import asyncio
from typing import Callable, List, Optional

from services.headlines.app.client import FeedClient
from services.headlines.app.decoder import decode
from services.headlines.app.errors import HeadlineFeedError
from shared.app_logging.logger import CorrelationContext, get_logger
from shared.schemas.feed_state import DataState, ErrorState, FeedState, LoadingState

logger = get_logger("headlines.controller")

StateListener = Callable[[FeedState], None]


class FeedStateController:
    """
    Owns the published feed state and sequences fetch + decode attempts.

    Every ``load`` takes a new generation number. A load whose generation has
    been superseded by the time it settles discards its result, so a slow
    earlier request never overwrites the outcome of a later one.
    """

    def __init__(self, client: FeedClient, *, skip_malformed: bool = False):
        self._client = client
        self._skip_malformed = skip_malformed
        self._state: FeedState = LoadingState()
        self._generation = 0
        self._listeners: List[StateListener] = []
        self._initial_task: Optional[asyncio.Task] = None

    @property
    def state(self) -> FeedState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener for published states; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def initialize(self) -> asyncio.Task:
        """Publish Loading and schedule the first load on the running loop."""
        self._publish(LoadingState())
        self._initial_task = asyncio.get_running_loop().create_task(self.load())
        return self._initial_task

    async def load(self) -> FeedState:
        self._generation += 1
        generation = self._generation

        with CorrelationContext(f"feed-load-{generation}"):
            try:
                document = await self._client.fetch_headlines()
                articles = decode(document, skip_malformed=self._skip_malformed)
            except HeadlineFeedError as e:
                logger.warning(f"Feed load failed: {e.describe()}")
                outcome: FeedState = ErrorState(message=e.describe(), error_type=type(e).__name__)
            except Exception as e:
                logger.exception(f"Unexpected error while loading feed: {e}")
                outcome = ErrorState(
                    message=f"Something went wrong: {e}", error_type=type(e).__name__
                )
            else:
                logger.info(f"✅ Loaded {len(articles)} articles")
                outcome = DataState(articles=tuple(articles))

            if generation != self._generation:
                logger.debug(
                    f"Discarding stale result of load {generation} "
                    f"(latest is {self._generation})"
                )
                return self._state

            self._publish(outcome)
            return outcome

    async def refresh(self) -> FeedState:
        """Publish Loading right away, then load again."""
        self._publish(LoadingState())
        return await self.load()

    async def aclose(self) -> None:
        if self._initial_task is not None and not self._initial_task.done():
            self._initial_task.cancel()
            try:
                await self._initial_task
            except asyncio.CancelledError:
                pass
        await self._client.aclose()

    def _publish(self, state: FeedState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception(f"State listener {listener!r} failed")
