"""
Registration Service
====================
Places a registering node in the tree and tells it who its parent is.

Per request, inside one write transaction:
  1. Known address  -> replay the parent recorded at first registration
  2. New address    -> append at the next position, resolve its parent
  3. Root (pos 1)   -> no parent

A missing parent record means the registry is corrupt: ParentNotFound
is raised and the transaction rolls back, so nothing is committed.
"""

import logging
from typing import Optional

from core.errors import DuplicateAddress, ParentNotFound
from core.registry_db import Node, RegistryPort
from core.topology import parent_of

log = logging.getLogger("registration")


class RegistrationService:

    def __init__(self, store):
        self.store = store

    def register(self, address: str, service_id: str) -> Optional[Node]:
        """Register `address` and return its parent node, or None for the root."""
        log.debug(f"{address} wants to register itself")
        try:
            with self.store.transaction() as tx:
                existing = tx.find_by_address(address)
                if existing is not None:
                    log.debug(f"{address} is already registered at position {existing.position}")
                    return self._stored_parent(tx, existing)

                position = tx.append(address, service_id, parent_of)
                log.debug(f"{address} inserted at position {position}")
                return self._resolve_parent(tx, position)
        except DuplicateAddress:
            # Lost the race to a concurrent registration of the same address
            log.debug(f"{address} was registered concurrently, replaying winner")
            with self.store.transaction(write=False) as tx:
                existing = tx.find_by_address(address)
                if existing is None:
                    raise
                return self._stored_parent(tx, existing)

    def _resolve_parent(self, tx: RegistryPort, position: int) -> Optional[Node]:
        parent_position = parent_of(position)
        if parent_position is None:
            log.debug(f"First registration, position {position} is the root")
            return None
        return self._lookup_parent(tx, position, parent_position)

    def _stored_parent(self, tx: RegistryPort, node: Node) -> Optional[Node]:
        if node.parent_position is None:
            return None
        return self._lookup_parent(tx, node.position, node.parent_position)

    def _lookup_parent(self, tx: RegistryPort, position: int, parent_position: int) -> Node:
        parent = tx.find_by_position(parent_position)
        if parent is None:
            log.error(f"Parent position {parent_position} of position {position} has no record")
            raise ParentNotFound(position, parent_position)
        log.debug(f"Position {position} parent is {parent.address} (position {parent_position})")
        return parent
