# app/database/storage.py
import copy
import logging
from datetime import date, datetime, time
from typing import Any, Callable, Dict, Iterable, List, Optional

logger = logging.getLogger(__name__)

Doc = Dict[str, Any]

DEFAULT_NUTRITION_GOALS = {
    "goal_calories": 2000,
    "goal_protein": 150,
    "goal_carbs": 200,
    "goal_fat": 70,
    "goal_water": 8,
    "goal_fiber": 30,
}


class ReferenceNotFoundError(LookupError):
    """Raised on create when a foreign key points at a missing record."""

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class InMemoryCollection:
    """A map of integer id -> record with its own id counter.

    Records go in and come out as copies, so nothing outside the
    collection can change stored state without calling ``update``.
    """

    def __init__(self, name: str):
        self.name = name
        self._docs: Dict[int, Doc] = {}
        self._next_id = 1

    def insert(self, doc: Doc) -> Doc:
        stored = copy.deepcopy(doc)
        stored["id"] = self._next_id
        self._next_id += 1
        self._docs[stored["id"]] = stored
        logger.debug(f"[{self.name}] inserted id={stored['id']}")
        return copy.deepcopy(stored)

    def get(self, doc_id: int) -> Optional[Doc]:
        doc = self._docs.get(doc_id)
        return copy.deepcopy(doc) if doc is not None else None

    def find(
        self,
        predicate: Optional[Callable[[Doc], bool]] = None,
        sort_key: Optional[Callable[[Doc], Any]] = None,
        reverse: bool = False,
    ) -> List[Doc]:
        docs: Iterable[Doc] = self._docs.values()
        if predicate is not None:
            docs = [d for d in docs if predicate(d)]
        docs = list(docs)
        if sort_key is not None:
            docs.sort(key=sort_key, reverse=reverse)
        return [copy.deepcopy(d) for d in docs]

    def find_one(self, predicate: Callable[[Doc], bool]) -> Optional[Doc]:
        for doc in self._docs.values():
            if predicate(doc):
                return copy.deepcopy(doc)
        return None

    def update(self, doc_id: int, patch: Doc) -> Optional[Doc]:
        existing = self._docs.get(doc_id)
        if existing is None:
            return None
        merged = {**existing, **copy.deepcopy(patch), "id": doc_id}
        self._docs[doc_id] = merged
        return copy.deepcopy(merged)

    def count(self) -> int:
        return len(self._docs)


def _day_bounds(on_date: date):
    return datetime.combine(on_date, time.min), datetime.combine(on_date, time.max)


class MemStorage:
    """Process-lifetime storage for every entity the API serves."""

    def __init__(self, validate_references: bool = False):
        self.validate_references = validate_references
        self.users = InMemoryCollection("users")
        self.families = InMemoryCollection("families")
        self.health_metrics = InMemoryCollection("health_metrics")
        self.workouts = InMemoryCollection("workouts")
        self.user_workouts = InMemoryCollection("user_workouts")
        self.meals = InMemoryCollection("meals")
        self.challenges = InMemoryCollection("challenges")
        self.user_challenges = InMemoryCollection("user_challenges")
        self.ai_conversations = InMemoryCollection("ai_conversations")
        self.nutrition_goals = InMemoryCollection("nutrition_goals")

    def _require(self, collection: InMemoryCollection, entity: str, doc_id: Optional[int]):
        if not self.validate_references or doc_id is None:
            return
        if collection.get(doc_id) is None:
            raise ReferenceNotFoundError(entity, doc_id)

    # ---------- users & families ----------
    def create_user(self, data: Doc) -> Doc:
        self._require(self.families, "Family", data.get("family_id"))
        now = datetime.utcnow()
        return self.users.insert({**data, "created_at": now, "updated_at": now})

    def get_user(self, user_id: int) -> Optional[Doc]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[Doc]:
        return self.users.find_one(lambda u: u.get("username") == username)

    def list_users(self) -> List[Doc]:
        return self.users.find(sort_key=lambda u: u["id"])

    def update_user(self, user_id: int, patch: Doc) -> Optional[Doc]:
        if "family_id" in patch:
            self._require(self.families, "Family", patch["family_id"])
        return self.users.update(user_id, {**patch, "updated_at": datetime.utcnow()})

    def create_family(self, data: Doc) -> Doc:
        return self.families.insert({**data, "created_at": datetime.utcnow()})

    def get_family(self, family_id: int) -> Optional[Doc]:
        return self.families.get(family_id)

    def list_families(self) -> List[Doc]:
        return self.families.find(sort_key=lambda f: f["id"])

    def list_family_users(self, family_id: int) -> List[Doc]:
        return self.users.find(lambda u: u.get("family_id") == family_id, sort_key=lambda u: u["id"])

    # ---------- health metrics ----------
    def create_health_metric(self, data: Doc) -> Doc:
        self._require(self.users, "User", data.get("user_id"))
        return self.health_metrics.insert(data)

    def get_health_metric(self, metric_id: int) -> Optional[Doc]:
        return self.health_metrics.get(metric_id)

    def list_health_metrics(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Doc]:
        def _match(m: Doc) -> bool:
            if m.get("user_id") != user_id:
                return False
            if start is not None and m["date"] < start:
                return False
            if end is not None and m["date"] > end:
                return False
            return True

        return self.health_metrics.find(_match, sort_key=lambda m: m["date"], reverse=True)

    # ---------- workouts ----------
    def create_workout(self, data: Doc) -> Doc:
        return self.workouts.insert(data)

    def get_workout(self, workout_id: int) -> Optional[Doc]:
        return self.workouts.get(workout_id)

    def list_workouts(self) -> List[Doc]:
        return self.workouts.find(sort_key=lambda w: w["id"])

    def create_user_workout(self, data: Doc) -> Doc:
        self._require(self.users, "User", data.get("user_id"))
        self._require(self.workouts, "Workout", data.get("workout_id"))
        doc = {"completed": False, "completed_at": None, "scheduled_for": None, **data}
        return self.user_workouts.insert(doc)

    def get_user_workout(self, user_workout_id: int) -> Optional[Doc]:
        return self.user_workouts.get(user_workout_id)

    def list_user_workouts(self, user_id: int) -> List[Doc]:
        return self.user_workouts.find(lambda uw: uw.get("user_id") == user_id, sort_key=lambda uw: uw["id"])

    def list_upcoming_user_workouts(self, user_id: int, now: Optional[datetime] = None) -> List[Doc]:
        now = now or datetime.utcnow()
        return self.user_workouts.find(
            lambda uw: (
                uw.get("user_id") == user_id
                and not uw.get("completed")
                and uw.get("scheduled_for") is not None
                and uw["scheduled_for"] > now
            ),
            sort_key=lambda uw: uw["scheduled_for"],
        )

    def complete_user_workout(self, user_workout_id: int, now: Optional[datetime] = None) -> Optional[Doc]:
        return self.user_workouts.update(
            user_workout_id, {"completed": True, "completed_at": now or datetime.utcnow()}
        )

    # ---------- meals & nutrition ----------
    def create_meal(self, data: Doc) -> Doc:
        self._require(self.users, "User", data.get("user_id"))
        return self.meals.insert(data)

    def get_meal(self, meal_id: int) -> Optional[Doc]:
        return self.meals.get(meal_id)

    def list_meals(self, user_id: int, on_date: Optional[date] = None) -> List[Doc]:
        if on_date is None:
            predicate = lambda m: m.get("user_id") == user_id
        else:
            start, end = _day_bounds(on_date)
            predicate = lambda m: m.get("user_id") == user_id and start <= m["timestamp"] <= end
        return self.meals.find(predicate, sort_key=lambda m: m["timestamp"])

    def get_nutrition_goals(self, user_id: int) -> Optional[Doc]:
        return self.nutrition_goals.find_one(lambda g: g.get("user_id") == user_id)

    def update_nutrition_goals(self, user_id: int, patch: Doc) -> Doc:
        existing = self.get_nutrition_goals(user_id)
        now = datetime.utcnow()
        if existing is None:
            self._require(self.users, "User", user_id)
            existing = self.nutrition_goals.insert(
                {"user_id": user_id, **DEFAULT_NUTRITION_GOALS, "created_at": now, "updated_at": now}
            )
        clean = {k: v for k, v in patch.items() if k not in ("id", "user_id")}
        return self.nutrition_goals.update(existing["id"], {**clean, "updated_at": now})

    # ---------- challenges ----------
    def create_challenge(self, data: Doc) -> Doc:
        return self.challenges.insert(data)

    def get_challenge(self, challenge_id: int) -> Optional[Doc]:
        return self.challenges.get(challenge_id)

    def list_challenges(self, active: Optional[bool] = None, now: Optional[datetime] = None) -> List[Doc]:
        if active is None:
            return self.challenges.find(sort_key=lambda c: c["id"])
        now = now or datetime.utcnow()

        def _is_active(c: Doc) -> bool:
            return c["start_date"] <= now <= c["end_date"]

        return self.challenges.find(lambda c: _is_active(c) == active, sort_key=lambda c: c["id"])

    def create_user_challenge(self, data: Doc) -> Doc:
        self._require(self.users, "User", data.get("user_id"))
        self._require(self.challenges, "Challenge", data.get("challenge_id"))
        doc = {"progress": 0, **data}
        challenge = self.challenges.get(doc.get("challenge_id"))
        doc["completed"] = bool(challenge) and doc["progress"] >= challenge["goal_value"]
        doc["joined_at"] = datetime.utcnow()
        return self.user_challenges.insert(doc)

    def get_user_challenge(self, user_challenge_id: int) -> Optional[Doc]:
        return self.user_challenges.get(user_challenge_id)

    def list_user_challenges(
        self, user_id: Optional[int] = None, challenge_id: Optional[int] = None
    ) -> List[Doc]:
        def _match(uc: Doc) -> bool:
            if user_id is not None and uc.get("user_id") != user_id:
                return False
            if challenge_id is not None and uc.get("challenge_id") != challenge_id:
                return False
            return True

        return self.user_challenges.find(_match, sort_key=lambda uc: uc["id"])

    def update_user_challenge_progress(self, user_challenge_id: int, progress: float) -> Optional[Doc]:
        participation = self.user_challenges.get(user_challenge_id)
        if participation is None:
            return None
        challenge = self.challenges.get(participation.get("challenge_id"))
        if challenge is None:
            logger.warning(
                f"Challenge {participation.get('challenge_id')} missing for user challenge {user_challenge_id}"
            )
            return None
        return self.user_challenges.update(
            user_challenge_id,
            {"progress": progress, "completed": progress >= challenge["goal_value"]},
        )

    # ---------- ai conversations ----------
    def create_conversation(self, data: Doc) -> Doc:
        self._require(self.users, "User", data.get("user_id"))
        now = datetime.utcnow()
        doc = {"messages": [], **data, "created_at": now, "updated_at": now}
        return self.ai_conversations.insert(doc)

    def get_conversation(self, conversation_id: int) -> Optional[Doc]:
        return self.ai_conversations.get(conversation_id)

    def list_conversations(self, user_id: int) -> List[Doc]:
        return self.ai_conversations.find(
            lambda c: c.get("user_id") == user_id, sort_key=lambda c: c["updated_at"], reverse=True
        )

    def append_conversation_messages(self, conversation_id: int, messages: List[Doc]) -> Optional[Doc]:
        conversation = self.ai_conversations.get(conversation_id)
        if conversation is None:
            return None
        return self.ai_conversations.update(
            conversation_id,
            {"messages": conversation["messages"] + list(messages), "updated_at": datetime.utcnow()},
        )
