# ============================================================================
# User & Follow Endpoints
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from typing import List
from uuid import UUID

from app.api.deps import get_account_service, get_follow_service
from app.core.security import get_current_active_user
from app.models.user import User
from app.schemas.user import (
    DeleteAccountRequest,
    FollowListResponse,
    MessageResponse,
    UserProfileResponse,
    UserResponse,
)
from app.services.accounts.account_service import AccountService
from app.services.social.follow_service import FollowService

router = APIRouter(prefix="/users", tags=["users"])


async def _profile(user: User, viewer: User, follows: FollowService) -> UserProfileResponse:
    counts = await follows.get_counts(user.id)
    viewer_follows = False
    if viewer.id != user.id:
        viewer_follows = await follows.is_following(viewer.id, user.id)

    profile = UserProfileResponse.model_validate(user)
    profile.followers_count = counts["followers"]
    profile.following_count = counts["following"]
    profile.viewer_follows = viewer_follows
    return profile


@router.get("", response_model=List[UserResponse])
async def list_users(
    current_user: User = Depends(get_current_active_user),
    accounts: AccountService = Depends(get_account_service)
):
    """All user profiles"""
    return await accounts.list_users()


@router.get("/me", response_model=UserProfileResponse)
async def get_me(
    current_user: User = Depends(get_current_active_user),
    follows: FollowService = Depends(get_follow_service)
):
    return await _profile(current_user, current_user, follows)


@router.delete("/me", response_model=MessageResponse)
async def delete_me(
    request: DeleteAccountRequest,
    current_user: User = Depends(get_current_active_user),
    accounts: AccountService = Depends(get_account_service)
):
    """Delete the caller's account and every follow touching it"""
    await accounts.delete_account(current_user, request.email, request.password)
    return MessageResponse(message="Account deleted")


@router.get("/search", response_model=UserResponse)
async def search_user(
    username: str,
    current_user: User = Depends(get_current_active_user),
    accounts: AccountService = Depends(get_account_service)
):
    user = await accounts.find_by_username(username)
    if not user:
        raise HTTPException(status_code=404, detail=f"No user named {username}")
    return user


@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user_profile(
    user_id: UUID,
    current_user: User = Depends(get_current_active_user),
    accounts: AccountService = Depends(get_account_service),
    follows: FollowService = Depends(get_follow_service)
):
    user = await accounts.get_user(user_id)
    return await _profile(user, current_user, follows)


# ============================================================================
# Follow graph
# ============================================================================
@router.post("/{user_id}/follow", response_model=MessageResponse)
async def follow_user(
    user_id: UUID,
    current_user: User = Depends(get_current_active_user),
    follows: FollowService = Depends(get_follow_service)
):
    await follows.follow(current_user, user_id)
    return MessageResponse(message="Followed")


@router.delete("/{user_id}/follow", response_model=MessageResponse)
async def unfollow_user(
    user_id: UUID,
    current_user: User = Depends(get_current_active_user),
    follows: FollowService = Depends(get_follow_service)
):
    await follows.unfollow(current_user, user_id)
    return MessageResponse(message="Unfollowed")


@router.get("/{user_id}/following", response_model=FollowListResponse)
async def get_following(
    user_id: UUID,
    current_user: User = Depends(get_current_active_user),
    accounts: AccountService = Depends(get_account_service),
    follows: FollowService = Depends(get_follow_service)
):
    await accounts.get_user(user_id)
    return {"user_id": str(user_id), "users": await follows.get_following(user_id)}


@router.get("/{user_id}/followers", response_model=FollowListResponse)
async def get_followers(
    user_id: UUID,
    current_user: User = Depends(get_current_active_user),
    accounts: AccountService = Depends(get_account_service),
    follows: FollowService = Depends(get_follow_service)
):
    await accounts.get_user(user_id)
    return {"user_id": str(user_id), "users": await follows.get_followers(user_id)}
