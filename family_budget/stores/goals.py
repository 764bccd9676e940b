"""
Goal Store

Owns the savings-goal collection.

CRITICAL: current_amount never exceeds target_amount. Contributions are
clamped at the target and goals never go down. There is no delete-goal
operation.

Contributions accumulate: calling contribute(id, 1000) twice adds 2000
(clamped), it is not a retried request.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from family_budget.audit import AuditLogger
from family_budget.exceptions import NotFoundError, ValidationError
from family_budget.models.ledger import FinancialGoal, GoalDraft
from family_budget.services.persistence import GOALS_KEY, PersistenceAdapter
from family_budget.stores.base import CollectionStore
from family_budget.stores.ids import IdGenerator
from family_budget.stores.samples import sample_goals
from family_budget.stores.validation import (
    check_positive_amount,
    issues_from_pydantic,
    validate_goal_draft,
)


class GoalStore(CollectionStore):
    """Savings goals, in creation order."""

    collection = GOALS_KEY

    def __init__(
        self,
        persistence: PersistenceAdapter,
        audit_logger: Optional[AuditLogger] = None,
        seed_samples: bool = False,
        id_generator: Optional[IdGenerator] = None,
    ):
        super().__init__(persistence, audit_logger)

        loaded = persistence.load_goals()
        seeded = loaded is None and seed_samples
        if seeded:
            loaded = sample_goals()
        self._goals: list[FinancialGoal] = list(loaded or [])

        self._ids = id_generator or IdGenerator()
        self._ids.observe(g.id for g in self._goals)

        if seeded:
            self._persist_initial()

    def __len__(self) -> int:
        return len(self._goals)

    def add_goal(self, draft: Union[GoalDraft, Mapping[str, Any]]) -> FinancialGoal:
        """
        Validate a draft and create a goal with current_amount = 0.

        Raises:
            ValidationError: Name empty or target not a positive number
            PersistenceError: Goal added in memory but not saved
        """
        draft = self._coerce_draft(draft)

        with self._lock:
            target, issues = validate_goal_draft(draft)
            if issues:
                self._reject("add_goal", issues)

            try:
                goal = FinancialGoal(
                    id=self._ids.next_id(),
                    name=draft.name,
                    target_amount=target,
                    current_amount=Decimal("0"),
                    deadline=draft.deadline,
                )
            except PydanticValidationError as e:
                self._reject("add_goal", issues_from_pydantic(e))

            self._goals.append(goal)
            self._persist()

        self._audit.log_goal_added(goal.id, goal.name, goal.target_amount)
        return goal

    def contribute(self, goal_id: str, amount: Any) -> FinancialGoal:
        """
        Add money to a goal: current = min(current + amount, target).

        Returns:
            The updated goal

        Raises:
            ValidationError: amount is not a positive number
            NotFoundError: No goal with this id (nothing changes)
            PersistenceError: Goal updated in memory but not saved
        """
        value, issues = check_positive_amount(amount, "amount")
        if issues:
            self._reject("contribute", issues)

        with self._lock:
            index = self._index_of(goal_id)
            if index is None:
                self._audit.log_not_found("goal", goal_id, "contribute")
                raise NotFoundError("goal", goal_id)

            goal = self._goals[index]
            new_current = min(goal.current_amount + value, goal.target_amount)
            updated = goal.model_copy(update={"current_amount": new_current})
            self._goals[index] = updated
            self._persist()

        self._audit.log_goal_contributed(
            goal_id=goal_id,
            requested=value,
            applied=new_current - goal.current_amount,
            current_amount=updated.current_amount,
            target_amount=updated.target_amount,
        )
        return updated

    def list_goals(self) -> tuple[FinancialGoal, ...]:
        with self._lock:
            return tuple(self._goals)

    def get_goal(self, goal_id: str) -> Optional[FinancialGoal]:
        with self._lock:
            index = self._index_of(goal_id)
            return None if index is None else self._goals[index]

    def _index_of(self, goal_id: str) -> Optional[int]:
        for index, goal in enumerate(self._goals):
            if goal.id == goal_id:
                return index
        return None

    def _write(self) -> None:
        self._persistence.save_goals(self._goals)

    def _coerce_draft(self, draft) -> GoalDraft:
        if isinstance(draft, GoalDraft):
            return draft
        try:
            return GoalDraft.model_validate(draft)
        except PydanticValidationError as e:
            self._reject("add_goal", issues_from_pydantic(e))

    def _reject(self, operation: str, issues) -> None:
        self._audit.log_validation_failed(
            operation,
            [issue.model_dump() for issue in issues],
        )
        raise ValidationError(issues)
