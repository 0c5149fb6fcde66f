"""Guide Schemas: read-only response models."""

from pydantic import BaseModel

from trustmap.core.records import Guide


class GuideResponse(BaseModel):
    id: str
    category: str
    title: str
    content: str

    @classmethod
    def from_record(cls, guide: Guide) -> "GuideResponse":
        return cls(
            id=guide.id, category=guide.category,
            title=guide.title, content=guide.content,
        )


class GuideListResponse(BaseModel):
    guides: list[GuideResponse]
    total: int
