from fastapi import Depends
from sqlalchemy.orm import Session

from family_directory.core.messaging import Messenger
from family_directory.core.store import FamilyStore
from family_directory.database import get_db


def get_store(db: Session = Depends(get_db)) -> FamilyStore:
    return FamilyStore(db)


def get_messenger(db: Session = Depends(get_db)) -> Messenger:
    return Messenger(db)
