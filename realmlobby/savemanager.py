"""Tracks character saves in progress, keyed by the session that started them.

Any member of a party may start a save for any other member, so each task
records both the user who started it (the owner) and the user whose character
is saved (the target).
"""

from __future__ import annotations

import logging
from typing import Protocol

from .savetask import CharacterSaveTask, CharacterSaveType
from .slotdata import CharacterSlotData
from .user import RealmUser

logger = logging.getLogger(__name__)


class CharacterStore(Protocol):
    """Persistent storage for characters."""

    def create_new_character(
        self, account_id: int, meta: CharacterSlotData, data: bytes
    ) -> int: ...

    def save_character(
        self, account_id: int, character_id: int, meta: CharacterSlotData, data: bytes
    ) -> bool: ...


class CharacterSaveManager:
    """Collects save chunks per session and commits them to a store."""

    def __init__(self, store: CharacterStore) -> None:
        self.store = store
        self.tasks: dict[str, CharacterSaveTask] = {}

    def begin_save_task(
        self,
        owner: RealmUser | None,
        target: RealmUser | None,
        character_id: int,
        meta: CharacterSlotData,
        save_type: CharacterSaveType,
    ) -> bool:
        """Start a save, replacing any task the owner already had."""
        if owner is None or target is None:
            logger.error("Save task requested without an owner or target user")
            return False

        task = CharacterSaveTask(save_type, character_id)
        task.owner_user = owner
        task.target_user = target
        task.set_meta_data(meta)
        self.tasks[owner.session_id] = task
        return True

    def append_save_data(self, session_id: str, data: bytes, end_of_data: bool) -> bool:
        """Add a chunk; on the last chunk validate and commit. True on success."""
        task = self.tasks.get(session_id)
        if task is None:
            logger.error("No save task found for session ID [%s]", session_id)
            return False

        try:
            task.append_data(data)
        except ValueError as error:
            logger.error("Append failed for session ID [%s]: %s", session_id, error)
            return False

        if not end_of_data:
            return True

        if not task.validate():
            logger.error("Validation failed for session ID [%s]", session_id)
            return False

        if not self.commit_save_task(session_id):
            logger.error("Commit failed for session ID [%s]", session_id)
            return False

        logger.debug("Final chunk committed for session ID [%s]", session_id)
        return True

    def commit_save_task(self, session_id: str) -> bool:
        """Remove the task and write it to the store."""
        task = self.tasks.pop(session_id, None)
        if task is None:
            logger.error("Save task for session ID [%s] not found", session_id)
            return False

        try:
            if not task.validate():
                return False

            target = task.target_user
            if target is None:
                logger.error("Save task target user not found")
                return False

            if task.save_type is CharacterSaveType.NEW_CHARACTER:
                new_id = self.store.create_new_character(
                    target.account_id, task.meta, task.data
                )
                if not new_id:
                    logger.error(
                        "Failed to create new character for account ID: %d", target.account_id
                    )
                    return False
                logger.debug(
                    "New character created with ID %d for account ID: %d",
                    new_id,
                    target.account_id,
                )
                target.character_id = new_id
            else:
                if task.character_id == 0:
                    logger.error("Invalid character ID for save task")
                    return False
                saved = self.store.save_character(
                    target.account_id, target.character_id, task.meta, task.data
                )
                if not saved:
                    logger.error(
                        "Failed to save character for account ID: %d", target.account_id
                    )
                    return False
                logger.debug("Character saved for account ID: %d", target.account_id)
        except Exception as error:  # the store may fail in any way; the lobby keeps running
            logger.error(
                "Exception while committing task for session ID [%s]: %s", session_id, error
            )
            return False

        logger.debug("Task for session ID [%s] committed successfully", session_id)
        return True

    def remove_save_task(self, session_id: str) -> bool:
        if self.tasks.pop(session_id, None) is None:
            logger.error("Save task for session ID [%s] not found", session_id)
            return False
        logger.debug("Save task for session ID [%s] removed", session_id)
        return True

    def find_save_task(self, session_id: str) -> CharacterSaveTask | None:
        task = self.tasks.get(session_id)
        if task is None:
            logger.error("Save task for session ID [%s] not found", session_id)
        return task