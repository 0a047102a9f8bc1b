from datetime import date, time
from typing import Optional

from lms_api.schemas.base import CamelModel


class CohortCreate(CamelModel):
    name: str
    description: Optional[str] = None
    start_date: date
    end_date: date
    is_active: bool = True


class CohortOut(CohortCreate):
    id: int


class CohortInfo(CamelModel):
    id: int
    name: str
    start_date: date
    end_date: date


class MemberCreate(CamelModel):
    user_id: int


class MemberOut(CamelModel):
    id: int
    class_id: int
    user_id: int


class ScheduledSessionCreate(CamelModel):
    day_number: int
    title: str
    description: Optional[str] = None
    schedule_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    module_type: Optional[str] = None
    order_index: int = 0
    is_active: bool = True


class ScheduledSessionOut(ScheduledSessionCreate):
    id: int
    class_id: int


class MaterialCreate(CamelModel):
    title: str
    file_url: str
    description: Optional[str] = None
    file_type: Optional[str] = None
    file_size: Optional[int] = None
    is_public: bool = True
    order_index: int = 0


class MaterialOut(MaterialCreate):
    id: int
    class_id: int
    uploaded_by: Optional[int] = None
