from sqlalchemy.orm import Session

from ...enum.code_sequence_enum import CodeEntity
from ...models.common.code_sequences import CodeSequence

CODE_WIDTH = 6


def generate_code(db: Session, entity: CodeEntity) -> str:
    """Next human-readable code for ``entity``, e.g. ``GP000042``.

    The counter row is locked and only flushed, so the number is consumed by
    the caller's transaction and handed back if that transaction rolls back.
    """
    sequence = (
        db.query(CodeSequence)
        .filter(CodeSequence.entity == entity.name)
        .with_for_update()
        .first()
    )
    if not sequence:
        sequence = CodeSequence(entity=entity.name, last_value=0)
        db.add(sequence)

    sequence.last_value += 1
    db.flush()
    return f"{entity.value}{sequence.last_value:0{CODE_WIDTH}d}"


def generate_gatepass_id(db: Session) -> str:
    return generate_code(db, CodeEntity.gatepass)


def generate_visitor_id(db: Session) -> str:
    return generate_code(db, CodeEntity.visitor)


def generate_asset_id(db: Session) -> str:
    return generate_code(db, CodeEntity.asset)


def generate_employee_id(db: Session) -> str:
    return generate_code(db, CodeEntity.employee)
