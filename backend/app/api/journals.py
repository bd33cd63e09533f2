from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.accounts import owned_account
from app.core.auth import get_current_user
from app.core.database import get_db
from app.models.journal import Journal
from app.models.user import User
from app.schemas.journal import JournalCreate, JournalUpdate, JournalResponse, JournalListResponse
from app.services.ledger.store import SqlTradeStore

router = APIRouter(tags=["journals"])


def _owned_journal(db: Session, user: User, journal_id: int) -> Journal:
    journal = (
        db.query(Journal)
        .filter(Journal.id == journal_id, Journal.user_id == user.id)
        .first()
    )
    if not journal:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return journal


@router.get("/api/accounts/{account_id}/journals", response_model=JournalListResponse)
def list_journals(
    account_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    owned_account(SqlTradeStore(db, current_user.id), account_id)
    journals = (
        db.query(Journal)
        .filter(Journal.account_id == account_id, Journal.user_id == current_user.id)
        .order_by(Journal.date.desc(), Journal.id.desc())
        .all()
    )
    return {"items": journals, "total": len(journals)}


@router.post(
    "/api/accounts/{account_id}/journals",
    response_model=JournalResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_journal(
    account_id: int,
    payload: JournalCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    account = owned_account(SqlTradeStore(db, current_user.id), account_id)
    journal = Journal(account_id=account.id, user_id=current_user.id, **payload.model_dump())
    db.add(journal)
    db.commit()
    db.refresh(journal)
    return journal


@router.get("/api/journals/{journal_id}", response_model=JournalResponse)
def get_journal(
    journal_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _owned_journal(db, current_user, journal_id)


@router.put("/api/journals/{journal_id}", response_model=JournalResponse)
def update_journal(
    journal_id: int,
    payload: JournalUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    journal = _owned_journal(db, current_user, journal_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(journal, key, value)
    db.commit()
    db.refresh(journal)
    return journal


@router.delete("/api/journals/{journal_id}")
def delete_journal(
    journal_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    journal = _owned_journal(db, current_user, journal_id)
    db.delete(journal)
    db.commit()
    return {"status": "ok"}
