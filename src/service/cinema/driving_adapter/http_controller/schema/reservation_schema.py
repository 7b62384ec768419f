from datetime import date as date_type, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel


class ReservationCreateRequest(BaseModel):
    # name and email are taken from the authenticated user, not from the request
    schedule_id: int
    sheet_id: int
    date: date_type

    class Config:
        json_schema_extra = {'example': {'schedule_id': 1, 'sheet_id': 3, 'date': '2024-06-01'}}


class ReservationResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 1,
                'schedule_id': 1,
                'sheet_id': 3,
                'date': '2024-06-01',
                'name': 'Alice',
                'email': 'alice@example.com',
                'user_id': 1,
                'created_at': '2024-05-30T10:30:00',
            }
        },
    }

    id: int
    schedule_id: int
    sheet_id: int
    date: date_type
    name: str
    email: str
    user_id: int
    created_at: Optional[datetime] = None


class FieldErrorResponse(BaseModel):
    field: str
    message: str


class ReservationRejectedResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'detail': 'seat already booked',
                'reason': 'seat_already_booked',
                'errors': [],
            }
        },
    }

    detail: str
    reason: str
    errors: List[FieldErrorResponse] = []


class AvailabilityResponse(BaseModel):
    schedule_id: int
    sheet_id: int
    date: date_type
    status: Literal['available', 'taken']


class MovieResponse(BaseModel):
    id: int
    name: str
    year: Optional[int] = None
    description: str
    image_url: str
    is_showing: Optional[bool] = None


class ScheduleResponse(BaseModel):
    id: int
    movie_id: int
    screen_id: int


class SheetResponse(BaseModel):
    id: int
    screen_id: int
    row: str
    column: int
    label: str


class ReservationDraftResponse(BaseModel):
    movie: MovieResponse
    schedule: ScheduleResponse
    sheet: SheetResponse
    date: date_type
    status: Literal['available', 'taken']


class SheetAvailabilityResponse(BaseModel):
    id: int
    row: str
    column: int
    label: str
    reserved: bool
