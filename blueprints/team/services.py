# blueprints/team/services.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from models import TeamMember
from blueprints.store import RecordStore, RecordNotFound, StoreError

log = logging.getLogger(__name__)


class DuplicateName(ValueError):
    def __init__(self, name: str):
        super().__init__(f"team member {name!r} already exists")
        self.name = name


@dataclass
class BulkDeleteResult:
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    members: List[TeamMember] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


class TeamDirectory(RecordStore):
    table = "team_members"

    def list(self) -> List[TeamMember]:
        with self._guard("list"):
            return list(self.session.query(TeamMember).order_by(TeamMember.name.asc()).all())

    def names(self) -> List[str]:
        return [m.name for m in self.list()]

    def create(self, name: str) -> TeamMember:
        clean = (name or "").strip()
        if not clean:
            raise ValueError("name must not be empty")
        key = clean.lower()
        with self._guard("create"):
            if self.session.query(TeamMember).filter_by(name_key=key).first():
                raise DuplicateName(clean)
            m = TeamMember(name=clean, name_key=key)
            self.session.add(m)
            self.session.commit()
            return m

    def delete(self, member_id: str) -> None:
        # брони хранят копию имени, поэтому удаление участника их не трогает
        with self._guard("delete"):
            m = self.session.get(TeamMember, member_id)
            if m is None:
                raise RecordNotFound(f"{self.table}.delete", member_id)
            self.session.delete(m)
            self.session.commit()

    def delete_many(self, member_ids: Iterable[str]) -> BulkDeleteResult:
        """
        Удаляет каждого независимо: неудача одного не отменяет остальных.
        Список в ответе всегда перечитан из хранилища.
        """
        result = BulkDeleteResult()
        for mid in member_ids:
            try:
                self.delete(mid)
            except StoreError:
                log.warning("team member delete failed", extra={"event": "team_delete_failed"})
                result.failed.append(mid)
            else:
                result.deleted.append(mid)
        result.members = self.list()
        return result
