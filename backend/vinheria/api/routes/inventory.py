from typing import List, Optional
from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from pydantic import BaseModel, ConfigDict
from vinheria.core.database import get_db
from vinheria.api.dependencies import require_identity
from vinheria.services.credential_verifier import VerifiedIdentity
from vinheria.services.inventory_ledger import inventory_ledger

router = APIRouter(prefix="/inventory", tags=["inventory"])

INVENTORY_URL = "/inventory"


class ProductResponse(BaseModel):
    id: int
    name: str
    quantity: int

    model_config = ConfigDict(from_attributes=True)


def _back_to_inventory() -> RedirectResponse:
    # 303 so the browser follows up with a GET after a form POST
    return RedirectResponse(url=INVENTORY_URL, status_code=status.HTTP_303_SEE_OTHER)


@router.get("", response_model=List[ProductResponse])
def list_products(
    identity: VerifiedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """List every product in creation order"""
    return inventory_ledger.list(db)


@router.post("/add")
def add_product(
    name: str = Form(""),
    quantity: Optional[str] = Form(None),
    identity: VerifiedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """Add a product; quantity defaults to 0"""
    inventory_ledger.add(db, name, quantity)
    return _back_to_inventory()


@router.post("/{product_id}/incr")
def increment_product(
    product_id: int,
    identity: VerifiedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    inventory_ledger.increment(db, product_id)
    return _back_to_inventory()


@router.post("/{product_id}/decr")
def decrement_product(
    product_id: int,
    identity: VerifiedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    """Take one unit out of stock; stays at 0 once empty"""
    inventory_ledger.decrement(db, product_id)
    return _back_to_inventory()


@router.post("/{product_id}/delete")
def delete_product(
    product_id: int,
    identity: VerifiedIdentity = Depends(require_identity),
    db: Session = Depends(get_db)
):
    inventory_ledger.delete(db, product_id)
    return _back_to_inventory()
