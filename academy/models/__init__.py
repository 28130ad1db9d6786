from .base import BaseModel
from .user import User, UserRole, StudentProfile
from .batch import Batch, BatchMode, BatchStatus, Session, SessionStatus
from .enrollment import Enrollment, EnrollmentStatus
from .payment import PaymentTransaction, PaymentStatus
from .orientation import StudentOrientation, OrientationLanguage

__all__ = [
    'BaseModel',
    'User',
    'UserRole',
    'StudentProfile',
    'Batch',
    'BatchMode',
    'BatchStatus',
    'Session',
    'SessionStatus',
    'Enrollment',
    'EnrollmentStatus',
    'PaymentTransaction',
    'PaymentStatus',
    'StudentOrientation',
    'OrientationLanguage'
]
