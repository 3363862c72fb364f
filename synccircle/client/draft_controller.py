# synccircle/client/draft_controller.py

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional
from synccircle.client.api_client import ApiRequestError
from synccircle.client.debouncer import Debouncer
from synccircle.client.query_cache import QueryCache
from synccircle.services.answer_kinds import AnswerKindFactory
import threading
import logging

logger = logging.getLogger(__name__)

AUTOSAVE_DELAY = 2.0


class ActionMode(Enum):
    SUBMIT = "submit"
    UPDATE = "update"


class MissingRequiredAnswers(ValueError):
    """Raised before any request is made when required questions are unanswered."""

    def __init__(self, titles: List[str]):
        self.titles = list(titles)
        super().__init__(f"Please complete all required fields. Missing: {', '.join(self.titles)}")


class DraftController:
    """Local answer state for one form plus its draft persistence.

    Edits are merged into ``answers`` and auto-saved as a draft once the user
    has been idle for ``autosave_delay`` seconds. With ``edit_response_id``
    the controller edits that response in place (``update`` mode); otherwise
    it fills in the caller's draft and finishes with ``submit``.

    ``api`` is a :class:`SyncCircleClient` or anything with the same
    ``save_response``/``update_response``/``get_my_response``/``get_response``
    methods.
    """

    def __init__(self, form: Dict[str, Any], api, cache: Optional[QueryCache] = None,
                 edit_response_id: Optional[int] = None, autosave_delay: float = AUTOSAVE_DELAY,
                 timer_factory=threading.Timer, clock: Optional[Callable[[], datetime]] = None):
        self.form = form
        self.api = api
        self.cache = cache if cache is not None else QueryCache()
        self.edit_response_id = edit_response_id
        self.answers: Dict[str, Any] = {}
        self.last_saved: Optional[datetime] = None
        self.is_cleared = False

        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lock = threading.RLock()
        # serializes draft saves with submit and update
        self._save_lock = threading.RLock()
        self._generation = 0
        self._autosave_timer = Debouncer(autosave_delay, self._autosave_now, timer_factory)

    @property
    def form_id(self) -> int:
        return self.form['id']

    @property
    def questions(self) -> List[Dict[str, Any]]:
        return self.form.get('questions') or []

    @property
    def mode(self) -> ActionMode:
        return ActionMode.UPDATE if self.edit_response_id is not None else ActionMode.SUBMIT

    @property
    def draft_key(self) -> str:
        return f"/api/forms/{self.form_id}/my-response"

    @property
    def response_key(self) -> Optional[str]:
        if self.edit_response_id is None:
            return None
        return f"/api/responses/{self.edit_response_id}"

    @property
    def autosave_pending(self) -> bool:
        return self._autosave_timer.pending

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self.answers)

    def update_answer(self, question_id: str, value: Any):
        """Record an answer and restart the auto-save countdown."""
        with self._lock:
            self.answers[question_id] = value
            self.is_cleared = False
        self._autosave_timer.schedule()

    def missing_required(self) -> List[str]:
        answers = self.snapshot()
        return [
            question.get('title')
            for question in self.questions
            if question.get('required')
            and not AnswerKindFactory.is_answered(question, answers.get(question.get('id')))
        ]

    def _persist(self, answers: Dict[str, Any], is_draft: bool) -> Dict[str, Any]:
        if self.mode is ActionMode.UPDATE:
            return self.api.update_response(self.edit_response_id, answers, is_draft)
        return self.api.save_response(self.form_id, answers, is_draft)

    def _record_draft(self, saved: Dict[str, Any], generation: int) -> bool:
        with self._lock:
            # submit() or clear() finished after this save started
            if generation != self._generation:
                return False
            self.last_saved = self._clock()
            if self.mode is ActionMode.SUBMIT:
                self.cache.set(self.draft_key, saved)
            else:
                self.cache.invalidate(self.response_key)
        return True

    def _begin_save(self):
        with self._lock:
            return dict(self.answers), self._generation

    def _end_generation(self):
        """Start a new generation; draft saves from the old one are not recorded."""
        with self._lock:
            self._generation += 1

    def _autosave_now(self):
        with self._save_lock:
            answers, generation = self._begin_save()
            if not answers:
                return None
            try:
                saved = self._persist(answers, is_draft=True)
            except ApiRequestError as e:
                logger.warning(f"Auto-save of form {self.form_id} failed: {e.message}")
                return None
            if not self._record_draft(saved, generation):
                logger.debug(f"Discarded auto-save result for form {self.form_id}")
                return None
        logger.debug(f"Auto-saved draft for form {self.form_id}")
        return saved

    def autosave(self):
        """Run the debounced draft save now; failures are only logged."""
        self._autosave_timer.cancel()
        return self._autosave_now()

    def save(self) -> Dict[str, Any]:
        """Explicit draft save. Required answers are not enforced; errors propagate."""
        self._autosave_timer.cancel()
        with self._save_lock:
            answers, generation = self._begin_save()
            saved = self._persist(answers, is_draft=True)
            self._record_draft(saved, generation)
        return saved

    def _ensure_complete(self):
        missing = self.missing_required()
        if missing:
            raise MissingRequiredAnswers(missing)

    def submit(self) -> Dict[str, Any]:
        """Create the final response; the local draft state is reset afterwards.

        Runs after any draft save already in flight, so a late draft result
        can never bring the submitted answers back.
        """
        if self.mode is not ActionMode.SUBMIT:
            raise RuntimeError("This controller edits an existing response; use update()")
        self._ensure_complete()

        self._autosave_timer.cancel()
        with self._save_lock:
            self._end_generation()
            submitted = self.api.save_response(self.form_id, self.snapshot(), False)
            with self._lock:
                self.answers = {}
                self.last_saved = None
                self.cache.evict(self.draft_key)
        logger.info(f"Submitted response {submitted.get('id')} for form {self.form_id}")
        return submitted

    def update(self) -> Dict[str, Any]:
        """Finalize the edited response in place; local answers are kept."""
        if self.mode is not ActionMode.UPDATE:
            raise RuntimeError("No existing response to update; use submit()")
        self._ensure_complete()

        self._autosave_timer.cancel()
        with self._save_lock:
            self._end_generation()
            updated = self.api.update_response(self.edit_response_id, self.snapshot(), False)
            self.cache.invalidate(self.response_key)
        logger.info(f"Updated response {self.edit_response_id} for form {self.form_id}")
        return updated

    def clear(self):
        """Forget local answers; later refetches leave the form empty until the next edit."""
        self._autosave_timer.cancel()
        self._end_generation()
        with self._lock:
            self.answers = {}
            self.last_saved = None
            self.is_cleared = True
            self.cache.evict(self.draft_key)
            if self.response_key:
                self.cache.evict(self.response_key)

    def load(self) -> Dict[str, Any]:
        """Fill ``answers`` from the edited response or the caller's draft."""
        if self.is_cleared:
            return self.snapshot()

        if self.mode is ActionMode.UPDATE:
            data = self.cache.fetch(self.response_key,
                                    lambda: self.api.get_response(self.edit_response_id))
        else:
            data = self.cache.fetch(self.draft_key, lambda: self.api.get_my_response(self.form_id))

        with self._lock:
            # clear() may have run while the request was in flight
            if not self.is_cleared and data and data.get('answers'):
                self.answers = dict(data['answers'])
            return dict(self.answers)

    def refresh(self) -> Dict[str, Any]:
        """Background refetch: mark the cached entry stale and load again."""
        self.cache.invalidate(self.response_key or self.draft_key)
        return self.load()

    def last_saved_label(self, now: Optional[datetime] = None) -> str:
        with self._lock:
            last_saved = self.last_saved
        if last_saved is None:
            return "Never"
        now = now or self._clock()
        minutes = int((now - last_saved).total_seconds() // 60)
        if minutes < 1:
            return "Just now"
        if minutes < 60:
            return f"{minutes}m ago"
        return f"{minutes // 60}h ago"

    def close(self):
        self._autosave_timer.cancel()
