from fastapi import Request

from app.services.waitlist_service import WaitlistIntake


def get_waitlist_intake(request: Request) -> WaitlistIntake:
    """Intake handler built at startup and stored on the application state"""
    return request.app.state.waitlist_intake
