from __future__ import annotations

import uuid
from typing import List, Optional

from models.chirp import Chirp
from utils.exceptions import Forbidden, ResourceNotFound


class SQLChirpStore:
    """Create/list/get/delete chirps. Ownership is enforced here, after the
    bearer gate has established who the caller is."""

    def __init__(self, storage):
        self._storage = storage

    def create(self, body: str, owner: uuid.UUID) -> Chirp:
        chirp = Chirp(body=body, user_id=str(owner))
        self._storage.new(chirp)
        self._storage.save()
        return chirp

    def list(self, author_id: Optional[uuid.UUID] = None, descending: bool = False) -> List[Chirp]:
        query = self._storage.get_session().query(Chirp)
        if author_id is not None:
            query = query.filter(Chirp.user_id == str(author_id))
        if descending:
            query = query.order_by(Chirp.created_at.desc(), Chirp.id.desc())
        else:
            query = query.order_by(Chirp.created_at.asc(), Chirp.id.asc())
        return query.all()

    def get(self, chirp_id: uuid.UUID) -> Chirp:
        chirp = self._storage.get(Chirp, chirp_id)
        if chirp is None:
            raise ResourceNotFound("Chirp not found")
        return chirp

    def delete(self, chirp_id: uuid.UUID, owner: uuid.UUID) -> None:
        chirp = self.get(chirp_id)
        if chirp.user_id != str(owner):
            raise Forbidden("You can only delete your own chirps")
        self._storage.delete(chirp)
        self._storage.save()
