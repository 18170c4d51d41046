# Request/response shapes for the areas API.
# Fields stay optional on the way in so a missing one becomes a 400, not a 422.

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field


class AreaIn(BaseModel):
    name: Optional[str] = None
    coordinates: Optional[List[Tuple[float, float]]] = None  # [[lat, lon]...]
    userId: Optional[str] = None

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.name:
            missing.append("name")
        if self.coordinates is None:
            missing.append("coordinates")
        if not self.userId:
            missing.append("userId")
        return missing

    def to_doc(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "coordinates": [[lat, lon] for lat, lon in self.coordinates or []],
            "userId": self.userId,
        }


class AreaOut(BaseModel):
    id: str = Field(alias="_id")
    name: str
    coordinates: List[List[float]]
    userId: str


class ErrorOut(BaseModel):
    error: str
    details: Optional[Any] = None
