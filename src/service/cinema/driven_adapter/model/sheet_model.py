from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class SheetModel(Base):
    __tablename__ = 'sheet'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    screen_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    column: Mapped[int] = mapped_column(Integer, nullable=False)
    row: Mapped[str] = mapped_column(String(1), nullable=False)

    __table_args__ = (UniqueConstraint('screen_id', 'row', 'column', name='uq_sheet_position'),)
