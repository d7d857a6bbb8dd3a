from jobboard.models.user import User, ProfileStats
from jobboard.models.job import Job
from jobboard.models.application import Application
from jobboard.models.saved_job import SavedJob
from jobboard.models.review import Review
from jobboard.models.notification import Notification

__all__ = ["User", "ProfileStats", "Job", "Application", "SavedJob", "Review", "Notification"]
