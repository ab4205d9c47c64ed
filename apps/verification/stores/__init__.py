from apps.verification.stores.base import CodeKey
from apps.verification.stores.base import CodeRecord
from apps.verification.stores.base import CodeStore
from apps.verification.stores.database import DatabaseCodeStore
from apps.verification.stores.memory import InMemoryCodeStore

__all__ = [
    'CodeKey',
    'CodeRecord',
    'CodeStore',
    'DatabaseCodeStore',
    'InMemoryCodeStore',
]
