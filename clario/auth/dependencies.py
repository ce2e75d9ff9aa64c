from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from clario.config import Settings
from clario.database import get_db
from clario.models import User, SubscriptionPlan, PLAN_RANK
from clario.auth.utils import verify_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def _resolve_user(token: str, db: Session, settings: Settings) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    token_data = verify_token(token, settings.secret_key, credentials_exception)
    user = db.query(User).filter(User.email == token_data.email).first()
    if user is None or not user.is_active:
        raise credentials_exception
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _resolve_user(credentials.credentials, db, settings)


def require_subscription(minimum_plan: SubscriptionPlan):
    def subscription_checker(current_user: User = Depends(get_current_user)):
        if PLAN_RANK[current_user.subscription_plan] < PLAN_RANK[minimum_plan]:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"This feature requires a {minimum_plan.value} subscription"
            )
        return current_user
    return subscription_checker


# Convenience wrapper
def require_pro():
    return require_subscription(SubscriptionPlan.PRO)
