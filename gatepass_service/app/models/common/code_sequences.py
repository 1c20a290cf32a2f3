from sqlalchemy import Column, Integer, String

from shared.core.database import Base


class CodeSequence(Base):
    __tablename__ = "code_sequences"

    entity = Column(String(16), primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)
