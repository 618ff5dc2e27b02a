"""Per-entity controllers built on the synchronization engine."""

from pathfinder.controllers.advisor import AdvisorController, ChatHistoryRepository
from pathfinder.controllers.auth import AuthController
from pathfinder.controllers.home import HomeController
from pathfinder.controllers.onboarding import OnboardingController
from pathfinder.controllers.profile import ProfileController
from pathfinder.controllers.projects import ProjectsController
from pathfinder.controllers.roles import RolesController
from pathfinder.controllers.skill_detail import SkillDetailController
from pathfinder.controllers.skills import SkillsController
from pathfinder.controllers.user import UserController

__all__ = [
    "AdvisorController",
    "AuthController",
    "ChatHistoryRepository",
    "HomeController",
    "OnboardingController",
    "ProfileController",
    "ProjectsController",
    "RolesController",
    "SkillDetailController",
    "SkillsController",
    "UserController",
]
