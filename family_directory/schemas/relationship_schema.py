from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel


RelationshipType = Literal["PARENT", "CHILD", "SPOUSE", "PARTNER", "SIBLING"]


class RelationshipCreate(BaseModel):
    from_person_id: int
    to_person_id: int
    type: RelationshipType


class RelationshipOut(BaseModel):
    id: int
    from_person_id: int
    to_person_id: int
    type: RelationshipType
    created_by_user_id: Optional[int] = None
    created_at: datetime

    model_config = {"from_attributes": True}
