"""
FastAPI dependencies shared by the routers.
"""
from typing import Optional

from fastapi import Header, Query

import config
from gateway import DelegationGateway
from local_store import LocalHistoryStore

_gateway = DelegationGateway()


def get_gateway() -> DelegationGateway:
    return _gateway


def get_local_store(user_id: str) -> LocalHistoryStore:
    return LocalHistoryStore(config.LOCAL_STORE_DIR, user_id)


def resolve_credential(
    x_openai_key: Optional[str] = Header(None),
    use_ai: bool = Query(True, alias="useAi"),
) -> Optional[str]:
    """Header key overrides the configured default; useAi=false withholds both."""
    if not use_ai:
        return None
    return x_openai_key or config.OPENAI_API_KEY
