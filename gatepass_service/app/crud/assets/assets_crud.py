# app/crud/assets/assets_crud.py
import logging
from uuid import UUID

from sqlalchemy import case, func, or_
from sqlalchemy.orm import Session

from shared.core.auth import ensure_role
from shared.core.schemas import Lookup, UserToken
from shared.helpers.db_helper import commit_or_fail, require_text
from shared.helpers.json_response_helper import conflict_error, not_found_error, validation_error
from shared.utils.enums import UserRole
from ...enum.asset_enum import AssetStatus, AssetType
from ...models.assets.assets import Asset
from ...models.assets.employee_assets import EmployeeAsset
from ...schemas.assets.assets_schemas import AssetCreate, AssetOut, AssetsRequest, AssetsResponse
from ..common.code_generator_crud import generate_asset_id

logger = logging.getLogger(__name__)


# ----------------------------------------------------------------------
# CRUD OPERATIONS
# ----------------------------------------------------------------------

def build_asset_filters(params: AssetsRequest):
    filters = []

    if params.status and params.status.lower() != "all":
        filters.append(Asset.status == AssetStatus(params.status.lower()))

    if params.asset_type and params.asset_type.lower() != "all":
        filters.append(Asset.asset_type == AssetType(params.asset_type.lower()))

    if params.search:
        search_term = f"%{params.search}%"
        filters.append(or_(
            Asset.asset_id.ilike(search_term),
            Asset.serial_number.ilike(search_term),
            Asset.brand.ilike(search_term),
            Asset.model.ilike(search_term)
        ))

    return filters


def get_assets(db: Session, params: AssetsRequest) -> AssetsResponse:
    if params.status and params.status.lower() != "all" \
            and params.status.lower() not in AssetStatus.__members__:
        return validation_error(f"Unknown asset status '{params.status}'")
    if params.asset_type and params.asset_type.lower() != "all" \
            and params.asset_type.lower() not in AssetType.__members__:
        return validation_error(f"Unknown asset type '{params.asset_type}'")

    base_query = db.query(Asset).filter(*build_asset_filters(params))
    total = base_query.with_entities(func.count(Asset.id)).scalar()

    results = (
        base_query
        .order_by(Asset.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )
    return {"assets": [AssetOut.model_validate(a) for a in results], "total": total}


def get_asset_overview(db: Session):
    fields = db.query(
        func.count(Asset.id).label("total_assets"),
        func.sum(case((Asset.status == AssetStatus.available, 1), else_=0)).label("available"),
        func.sum(case((Asset.status == AssetStatus.assigned, 1), else_=0)).label("assigned"),
        func.sum(case((Asset.status == AssetStatus.maintenance, 1), else_=0)).label("maintenance"),
        func.sum(case((Asset.status == AssetStatus.retired, 1), else_=0)).label("retired"),
    ).one()

    return {
        "totalAssets": int(fields.total_assets or 0),
        "available": int(fields.available or 0),
        "assigned": int(fields.assigned or 0),
        "maintenance": int(fields.maintenance or 0),
        "retired": int(fields.retired or 0),
    }


def get_asset_by_id(db: Session, asset_id: UUID):
    return db.query(Asset).filter(Asset.id == asset_id).first()


def get_available_assets(db: Session):
    assets = (
        db.query(Asset)
        .filter(Asset.status == AssetStatus.available)
        .order_by(Asset.asset_id.asc())
        .all()
    )
    return [AssetOut.model_validate(a) for a in assets]


def create_asset(db: Session, data: AssetCreate, actor: UserToken):
    ensure_role(actor, UserRole.admin)

    serial_number = require_text(data.serial_number)
    if not serial_number:
        return validation_error("Serial number is required")

    existing_serial = db.query(Asset).filter(
        func.lower(Asset.serial_number) == serial_number.lower()
    ).first()
    if existing_serial:
        return conflict_error(
            f"Asset with serial number '{serial_number}' already exists")

    db_asset = Asset(
        asset_id=generate_asset_id(db),
        asset_type=data.asset_type,
        brand=require_text(data.brand),
        model=require_text(data.model),
        serial_number=serial_number,
        purchase_date=data.purchase_date,
        warranty_expiry=data.warranty_expiry,
        current_location=require_text(data.current_location),
        status=AssetStatus.available,
    )
    db.add(db_asset)
    commit_or_fail(db, "Failed to add asset", refresh=db_asset,
                   conflict_message=f"Asset with serial number '{serial_number}' already exists")

    logger.info("Asset %s (%s) added by %s", db_asset.asset_id,
                serial_number, actor.user_id)
    return db_asset


def update_asset_status(db: Session, asset_id: UUID, new_status: AssetStatus, actor: UserToken):
    """Direct status override; assignment rows are left as they are."""
    ensure_role(actor, UserRole.admin)

    db_asset = get_asset_by_id(db, asset_id)
    if not db_asset:
        return not_found_error("Asset not found")

    has_active_assignment = db.query(EmployeeAsset.id).filter(
        EmployeeAsset.asset_id == asset_id, EmployeeAsset.is_active == True
    ).first() is not None
    if has_active_assignment != (new_status == AssetStatus.assigned):
        logger.warning(
            "Asset %s set to %s while active assignment=%s; assignment records not changed",
            db_asset.asset_id, new_status.value, has_active_assignment)

    db_asset.status = new_status
    commit_or_fail(db, "Failed to update asset status", refresh=db_asset)
    logger.info("Asset %s status set to %s by %s", db_asset.asset_id,
                new_status.value, actor.user_id)
    return db_asset


def asset_type_lookup():
    return [Lookup(id=t.value, name=t.name.capitalize()) for t in AssetType]


def asset_status_lookup():
    return [Lookup(id=s.value, name=s.name.capitalize()) for s in AssetStatus]
