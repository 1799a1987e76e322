"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional

# Sentinel JIDs used by the test console; sends to these never reach Zoom.
TEST_JIDS: FrozenSet[str] = frozenset({
    "test@xmpp.zoom.us",
    "bot@xmpp.zoom.us",
    "user@xmpp.zoom.us",
})


def is_test_jid(jid: Optional[str]) -> bool:
    return jid in TEST_JIDS


@dataclass
class BotIdentity:
    """Account id and robot JID learned from Zoom events."""

    account_id: Optional[str] = None
    robot_jid: Optional[str] = None

    @property
    def is_known(self) -> bool:
        return bool(self.account_id and self.robot_jid)

    def learn(
        self,
        account_id: Optional[str] = None,
        robot_jid: Optional[str] = None,
        overwrite: bool = False,
    ) -> List[str]:
        """Record identity fields, returning the names of fields changed.

        Empty values are ignored. Without ``overwrite`` only unset fields
        are filled.
        """
        changed = []
        for name, value in (("account_id", account_id), ("robot_jid", robot_jid)):
            if not value:
                continue
            current = getattr(self, name)
            if current == value or (current and not overwrite):
                continue
            setattr(self, name, value)
            changed.append(name)
        return changed


@dataclass
class DispatchResult:
    """HTTP status and JSON body to acknowledge a webhook call with."""

    status_code: int
    body: Dict[str, Any]
