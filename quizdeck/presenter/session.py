from __future__ import annotations

import logging
from typing import Dict, Optional

from ..data.schemas import Answer, AnswerOutcome, Question
from ..utils.determinism import RandomSource, make_rng
from .presenter import AnswerCallback, IssueCallback, ShuffledQuestionPresenter
from .shuffle import ShuffleMapping

logger = logging.getLogger(__name__)


class PresentationSession:
    """Presenters for one quiz run, cached by question id.

    A question id maps to the same presenter (and therefore the same shuffle)
    for the lifetime of the session. Presenters share the session's RNG.
    """

    def __init__(
        self,
        rng: Optional[RandomSource] = None,
        seed: Optional[int] = None,
        on_answer: Optional[AnswerCallback] = None,
        on_issue: Optional[IssueCallback] = None,
    ):
        self.rng = rng if rng is not None else make_rng(seed)
        self._on_answer = on_answer
        self._on_issue = on_issue
        self._presenters: Dict[str, ShuffledQuestionPresenter] = {}

    def __len__(self) -> int:
        return len(self._presenters)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._presenters

    def presenter_for(self, question: Question) -> ShuffledQuestionPresenter:
        presenter = self._presenters.get(question.id)
        if presenter is None:
            presenter = ShuffledQuestionPresenter(
                question,
                rng=self.rng,
                on_answer=self._on_answer,
                on_issue=self._on_issue,
            )
            self._presenters[question.id] = presenter
        return presenter

    def mapping_for(self, question: Question) -> Optional[ShuffleMapping]:
        return self.presenter_for(question).prepare()

    def submit(self, question: Question, answer: Answer) -> AnswerOutcome:
        return self.presenter_for(question).submit_answer(answer)

    def discard(self, question_id: str) -> None:
        """Forget a question so the next presentation starts from scratch."""
        if self._presenters.pop(question_id, None) is not None:
            logger.debug("Discarded presenter for question %s", question_id)
