"""Owner-scoped task listing with filtering, sorting and paging.

Raw query-string values are parsed leniently: anything unrecognised is
dropped rather than rejected, so a bad ``sortBy`` or ``limit`` just means
no sort or no limit.
"""
from dataclasses import dataclass
from typing import List, Mapping, Optional
from sqlalchemy.orm import Session
from tasktracker.models.task import Task
from tasktracker.models.user import User
from tasktracker.validation import MAX_DB_INT

SORT_FIELDS = {
    "createdAt": Task.created_at,
    "updatedAt": Task.updated_at,
    "description": Task.description,
    "completed": Task.completed,
}
SORT_DIRECTIONS = ("asc", "desc")


@dataclass
class TaskQuery:
    completed: Optional[bool] = None
    sort_field: Optional[str] = None
    sort_desc: bool = False
    limit: Optional[int] = None
    skip: int = 0


def _parse_bool(raw: Optional[str]) -> Optional[bool]:
    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


def _parse_count(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    raw = raw.strip()
    # isdigit alone accepts non-ASCII digits such as "²"
    if not (raw.isascii() and raw.isdigit()):
        return None
    value = int(raw)
    return value if value <= MAX_DB_INT else None


def parse_task_query(params: Mapping[str, str]) -> TaskQuery:
    query = TaskQuery(completed=_parse_bool(params.get("completed")))

    sort_by = params.get("sortBy")
    if sort_by:
        field, _, direction = sort_by.partition(":")
        if field in SORT_FIELDS and direction in SORT_DIRECTIONS:
            query.sort_field = field
            query.sort_desc = direction == "desc"

    limit = _parse_count(params.get("limit"))
    # limit=0 means "no limit"
    query.limit = limit or None
    query.skip = _parse_count(params.get("skip")) or 0
    return query


def query_tasks(db: Session, owner: User, params: Mapping[str, str]) -> List[Task]:
    spec = parse_task_query(params)
    query = db.query(Task).filter(Task.owner_id == owner.id)
    if spec.completed is not None:
        query = query.filter(Task.completed.is_(spec.completed))

    order = []
    if spec.sort_field:
        column = SORT_FIELDS[spec.sort_field]
        order.append(column.desc() if spec.sort_desc else column.asc())
    # insertion order when unsorted, and as the tie-breaker
    order.append(Task.id.asc())
    query = query.order_by(*order)

    if spec.skip:
        query = query.offset(spec.skip)
    if spec.limit is not None:
        query = query.limit(spec.limit)
    return query.all()
