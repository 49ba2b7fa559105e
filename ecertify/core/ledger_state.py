"""Ledger State: explicit container for the four ledger components.

Invariants:
    - Built empty; no process-wide singleton (every Ledger owns its own state)
    - Linkage and grants share the registry instance they authorize against
"""

from dataclasses import dataclass, field

from ecertify.core.access_grants import AccessGrantManager
from ecertify.core.certificate_store import CertificateStore
from ecertify.core.identity_registry import IdentityRegistry
from ecertify.core.linkage_manager import LinkageManager


@dataclass
class LedgerState:
    registry: IdentityRegistry = field(default_factory=IdentityRegistry)
    linkage: LinkageManager = field(init=False)
    certificates: CertificateStore = field(default_factory=CertificateStore)
    grants: AccessGrantManager = field(init=False)

    def __post_init__(self) -> None:
        self.linkage = LinkageManager(self.registry)
        self.grants = AccessGrantManager(self.registry)
