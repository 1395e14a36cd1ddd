"""
Entity store.

Single choke point for reading and writing the snapshot. Every mutation is
a full load -> mutate -> save cycle; there is no locking, so concurrent
writers resolve as last-writer-wins on the whole snapshot.
"""

import json
import logging
from datetime import datetime
from typing import Any, Callable, Optional

from pydantic import ValidationError
from pydantic.alias_generators import to_camel
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.financials import apply_repair_update, prepare_new_repair
from app.core.ids import IdGenerator
from app.core.integrity import Removal, delete_client, delete_device
from app.models.base import utcnow
from app.models.record import Record
from app.models.snapshot import Collection, Snapshot
from app.models.store_entry import StoreEntry


logger = logging.getLogger(__name__)


# Fields callers can never set through add/update
_PROTECTED_FIELDS = {
    Collection.CLIENTS: {"id", "created_at"},
    Collection.DEVICES: {"id", "created_at"},
    Collection.REPAIRS: {"id", "entry_date", "total_cost", "completion_date"},
    Collection.EXPENSES: {"id"},
}

# Dialects with an INSERT .. ON CONFLICT DO UPDATE
_UPSERTS = {
    "sqlite": sqlite_insert,
    "postgresql": postgresql_insert,
}


class EntityStore:
    """
    Owns the canonical snapshot and the side-channel markers stored beside it.

    Args:
        session_factory: Async session factory bound to the persistence medium
        key: Well-known key the snapshot is stored under
        id_generator: Identifier generator for new records
        clock: Returns the current time (UTC)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        key: str = "repair_shop_v1",
        id_generator: Optional[IdGenerator] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._session_factory = session_factory
        self.key = key
        self.ids = id_generator or IdGenerator()
        self.clock = clock

    # ------------------------------------------------------------------
    # Persistence medium
    # ------------------------------------------------------------------

    async def _read(self, key: str) -> Optional[str]:
        async with self._session_factory() as session:
            entry = await session.get(StoreEntry, key)
            return entry.value if entry else None

    async def _write(self, key: str, value: str) -> None:
        """Insert or replace the row for ``key`` in one statement."""
        async with self._session_factory() as session:
            insert = _UPSERTS.get(session.get_bind().dialect.name)
            if insert is None:
                await session.merge(StoreEntry(key=key, value=value))
            else:
                stmt = insert(StoreEntry).values(key=key, value=value)
                stmt = stmt.on_conflict_do_update(
                    index_elements=[StoreEntry.key],
                    set_={"value": stmt.excluded["value"], "updated_at": utcnow()},
                )
                await session.execute(stmt)
            await session.commit()

    async def load(self) -> Snapshot:
        """
        Read the current snapshot.

        A missing snapshot, or content that is not a JSON object, is
        replaced by a fresh one (empty collections, seed catalog). Records
        that fail validation are dropped one by one and the rest is kept.
        Either way the caller never sees an error and the previous content
        is kept under ``<key>.corrupt``.
        """
        raw = await self._read(self.key)
        if raw is None:
            logger.info("Aucun snapshot trouvé, initialisation d'un snapshot vide")
            return await self._reset()

        try:
            return Snapshot.model_validate_json(raw)
        except ValidationError:
            return await self._recover(raw)

    async def _recover(self, raw: str) -> Snapshot:
        corrupt_key = f"{self.key}.corrupt"
        try:
            data = json.loads(raw)
        except ValueError:
            data = None

        await self._write(corrupt_key, raw)

        if not isinstance(data, dict):
            logger.warning(f"Snapshot illisible, sauvegardé sous '{corrupt_key}' et réinitialisé")
            return await self._reset()

        snapshot, rejected = Snapshot.salvage(data)
        for problem in rejected:
            logger.warning(f"Enregistrement écarté du snapshot: {problem}")
        logger.warning(
            f"{len(rejected)} enregistrement(s) écarté(s), "
            f"contenu d'origine sauvegardé sous '{corrupt_key}'"
        )
        await self.save(snapshot)
        return snapshot

    async def _reset(self) -> Snapshot:
        snapshot = Snapshot.fresh()
        await self.save(snapshot)
        return snapshot

    async def save(self, snapshot: Snapshot) -> None:
        """Serialize and write the whole snapshot, replacing prior content."""
        await self._write(self.key, snapshot.model_dump_json(by_alias=True))

    async def get_marker(self, name: str) -> Optional[str]:
        """Read a side-channel value stored beside the snapshot."""
        return await self._read(name)

    async def set_marker(self, name: str, value: str) -> None:
        await self._write(name, value)

    # ------------------------------------------------------------------
    # Collection operations
    # ------------------------------------------------------------------

    def _clean(self, collection: Collection, attrs: dict[str, Any]) -> dict[str, Any]:
        """
        Map camelCase keys to field names and drop protected/unknown fields.

        None clears optional fields and is ignored for the others.
        """
        record_type = collection.record_type
        fields = record_type.model_fields
        names = {to_camel(name): name for name in fields}
        names.update({name: name for name in fields})
        protected = _PROTECTED_FIELDS[collection]

        cleaned = {}
        for key, value in attrs.items():
            name = names.get(key)
            if name is None or name in protected:
                continue
            if value is None and fields[name].default is not None:
                continue
            cleaned[name] = value
        return cleaned

    async def get(self, collection: Collection, record_id: str) -> Optional[Record]:
        """Record by id on a fresh load, None if absent."""
        snapshot = await self.load()
        return snapshot.find(Collection(collection), record_id)

    async def add(self, collection: Collection, attrs: dict[str, Any]) -> Record:
        """
        Create a record.

        Args:
            collection: Target collection
            attrs: Record attributes (field names or camelCase keys)

        Returns:
            The created record, with its generated id and timestamps
        """
        collection = Collection(collection)
        snapshot = await self.load()
        now = self.clock()

        data = self._clean(collection, attrs)
        data["id"] = self.ids.new_id(snapshot.ids(collection))
        if collection in (Collection.CLIENTS, Collection.DEVICES):
            data["created_at"] = now
        elif collection == Collection.EXPENSES and data.get("date") is None:
            data["date"] = now

        record = collection.record_type.model_validate(data)
        if collection == Collection.REPAIRS:
            record = prepare_new_repair(record, now)

        snapshot.records(collection).append(record)
        await self.save(snapshot)

        logger.debug(f"Ajout {collection.value}/{record.id}")
        return record

    async def update(self, collection: Collection, record_id: str, attrs: dict[str, Any]) -> None:
        """
        Merge ``attrs`` over the record matching ``record_id``.

        Identifiers, creation timestamps and derived fields are ignored.
        No match is a no-op. Callers re-load to observe the result.
        """
        collection = Collection(collection)
        snapshot = await self.load()
        records = snapshot.records(collection)
        changes = self._clean(collection, attrs)

        for index, record in enumerate(records):
            if record.id != record_id:
                continue
            if collection == Collection.REPAIRS:
                records[index] = apply_repair_update(record, changes, self.clock())
            else:
                records[index] = collection.record_type.model_validate(
                    {**record.model_dump(), **changes}
                )
            await self.save(snapshot)
            logger.debug(f"Mise à jour {collection.value}/{record_id}")
            return

        logger.debug(f"Mise à jour ignorée, {collection.value}/{record_id} introuvable")

    async def delete(self, collection: Collection, record_id: str) -> Removal:
        """
        Remove a record; clients and devices cascade to their dependents.

        Returns:
            Removal counts. Nothing removed means nothing written.
        """
        collection = Collection(collection)
        snapshot = await self.load()

        if collection == Collection.CLIENTS:
            removal = delete_client(snapshot, record_id)
        elif collection == Collection.DEVICES:
            removal = delete_device(snapshot, record_id)
        else:
            records = snapshot.records(collection)
            kept = [r for r in records if r.id != record_id]
            removal = Removal(**{collection.value: len(records) - len(kept)})
            snapshot.set_records(collection, kept)

        if removal.total:
            await self.save(snapshot)
        else:
            logger.debug(f"Suppression ignorée, {collection.value}/{record_id} introuvable")
        return removal
