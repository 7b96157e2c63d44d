# backend/routes/delegations.py
from typing import List

from fastapi import APIRouter, Depends

from schemas.delegation import DelegationCreate, DelegationOut, DelegationUpdate
from schemas.user import SuccessResponse
from services.delegations import DelegationRepository, get_delegation_repository

router = APIRouter(prefix="/delegations", tags=["Delegations"])


# List every delegation, newest first
@router.get("", response_model=List[DelegationOut])
def list_delegations(repo: DelegationRepository = Depends(get_delegation_repository)):
    return repo.list()


# Retrieve a single delegation
@router.get("/{delegation_id}", response_model=DelegationOut)
def get_delegation(delegation_id: int, repo: DelegationRepository = Depends(get_delegation_repository)):
    return repo.get(delegation_id)


# Create a delegation and return the stored row
@router.post("", response_model=DelegationOut)
def create_delegation(
    payload: DelegationCreate,
    repo: DelegationRepository = Depends(get_delegation_repository),
):
    return repo.create(payload)


# Replace every mutable column of a delegation
@router.put("/{delegation_id}", response_model=SuccessResponse)
def update_delegation(
    delegation_id: int,
    payload: DelegationUpdate,
    repo: DelegationRepository = Depends(get_delegation_repository),
):
    repo.update(delegation_id, payload)
    return SuccessResponse()


# Delete a delegation; unknown ids are not an error
@router.delete("/{delegation_id}", response_model=SuccessResponse)
def delete_delegation(delegation_id: int, repo: DelegationRepository = Depends(get_delegation_repository)):
    repo.delete(delegation_id)
    return SuccessResponse()
