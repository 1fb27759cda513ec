from sqlalchemy import DDL, CheckConstraint, Column, Integer, Text, event, func, text
from sqlalchemy.orm import declarative_base

Base = declarative_base()
metadata = Base.metadata


class Appointments(Base):
    __tablename__ = 'appointments'
    __table_args__ = (
        CheckConstraint(
            "service IN ('consultation', 'treatment', 'extraction', 'prosthetics')",
            name='ck_appointments_service',
        ),
        CheckConstraint('start < "end"', name='ck_appointments_interval'),
    )

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    phone_number = Column('phoneNumber', Text, nullable=False)
    service = Column(Text, nullable=False)
    # ISO-8601 UTC with milliseconds: string order == time order
    start = Column(Text, nullable=False, index=True)
    end = Column('end', Text, nullable=False)
    created_at = Column('createdAt', Text, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(
        'updatedAt',
        Text,
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=func.current_timestamp(),
    )


OVERLAP_ABORT_MESSAGE = 'appointment overlaps an existing booking'

# Store-level non-overlap guard; mirrored in the alembic migration.
NO_OVERLAP_INSERT_TRIGGER = f"""
CREATE TRIGGER IF NOT EXISTS appointments_no_overlap_insert
BEFORE INSERT ON appointments
WHEN EXISTS (
    SELECT 1 FROM appointments
    WHERE start < NEW."end" AND "end" > NEW.start
)
BEGIN
    SELECT RAISE(ABORT, '{OVERLAP_ABORT_MESSAGE}');
END
"""

NO_OVERLAP_UPDATE_TRIGGER = f"""
CREATE TRIGGER IF NOT EXISTS appointments_no_overlap_update
BEFORE UPDATE OF start, "end" ON appointments
WHEN EXISTS (
    SELECT 1 FROM appointments
    WHERE id != NEW.id AND start < NEW."end" AND "end" > NEW.start
)
BEGIN
    SELECT RAISE(ABORT, '{OVERLAP_ABORT_MESSAGE}');
END
"""

for _ddl in (NO_OVERLAP_INSERT_TRIGGER, NO_OVERLAP_UPDATE_TRIGGER):
    event.listen(
        Appointments.__table__,
        'after_create',
        DDL(_ddl).execute_if(dialect='sqlite'),
    )
