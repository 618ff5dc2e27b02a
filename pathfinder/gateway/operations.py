"""Named GraphQL operations used by the client.

Each builder returns a ``GraphQLOperation`` ready for ``RemoteGateway.execute``.
User-scoped operations take the user id as an ordinary argument; the backend
does not use transport-level auth headers.
"""

from typing import Any

from pathfinder.gateway.base import GraphQLOperation, OperationKind

# =============================================================================
# Documents
# =============================================================================

_USER_SKILL_FIELDS = """
    skills {
      id
      level
      skill {
        id
        name
        category
      }
    }
"""

GET_USER_BY_ID = f"""
query GetUserById($id: ID!) {{
  getUserById(id: $id) {{
    id
    name
    email
    currentRole
    yearsExperience
{_USER_SKILL_FIELDS}
  }}
}}
"""

GET_USER_ONBOARDING_DATA = f"""
query GetUserOnboardingData($id: ID!) {{
  getUserById(id: $id) {{
    id
    name
    email
    phone
    birthday
    gender
    profileImageUrl
    currentRole
    yearsExperience
    highestQualification
{_USER_SKILL_FIELDS}
    projects {{
      id
      name
      description
      githubLink
      status
    }}
    careerGoals {{
      id
      title
    }}
  }}
}}
"""

GET_SKILLS = """
query GetSkills {
  getSkills {
    id
    name
    category
  }
}
"""

GET_CAREER_PATHS = """
query GetCareerPaths {
  getCareerPaths {
    id
    name
    description
  }
}
"""

GET_SKILL_DETAILS_BY_NAME = """
query GetSkillDetailsByName($name: String!) {
  getSkillByName(name: $name) {
    id
    name
    description
    relatedRoles {
      title
    }
    courses {
      title
      provider
    }
  }
}
"""

ADD_USER_SKILL = """
mutation AddUserSkill($userId: ID!, $skillId: ID!, $level: String!) {
  addUserSkill(userId: $userId, skillId: $skillId, level: $level) {
    id
    level
  }
}
"""

REMOVE_USER_SKILL = """
mutation RemoveUserSkill($userSkillId: ID!) {
  removeUserSkill(userSkillId: $userSkillId)
}
"""

ADD_USER_CAREER_GOAL = """
mutation AddUserCareerGoal($userId: ID!, $careerPathId: ID!) {
  addUserCareerGoal(userId: $userId, careerPathId: $careerPathId) {
    id
  }
}
"""

REMOVE_USER_CAREER_GOAL = """
mutation RemoveUserCareerGoal($userId: ID!, $careerPathId: ID!) {
  removeUserCareerGoal(userId: $userId, careerPathId: $careerPathId) {
    id
  }
}
"""

UPDATE_USER = """
mutation UpdateUser(
  $id: ID!
  $name: String
  $phone: String
  $birthday: String
  $gender: Gender
  $profileImageUrl: String
) {
  updateUser(
    id: $id
    name: $name
    phone: $phone
    birthday: $birthday
    gender: $gender
    profileImageUrl: $profileImageUrl
  ) {
    id
  }
}
"""

_AUTH_PAYLOAD_FRAGMENT = """
fragment AuthPayload on AuthResponse {
  token
  user {
    id
    name
    email
  }
}
"""

LOGIN = f"""
mutation Login($email: String!, $password: String!) {{
  login(email: $email, password: $password) {{
    ...AuthPayload
  }}
}}
{_AUTH_PAYLOAD_FRAGMENT}
"""

REGISTER = f"""
mutation Register($email: String!, $password: String!, $name: String!) {{
  register(email: $email, password: $password, name: $name) {{
    ...AuthPayload
  }}
}}
{_AUTH_PAYLOAD_FRAGMENT}
"""


# =============================================================================
# Builders
# =============================================================================


def _present(**kwargs: Any) -> dict[str, Any]:
    """Drop arguments whose value is None (absent optional inputs)."""
    return {k: v for k, v in kwargs.items() if v is not None}


def get_user_by_id(user_id: str) -> GraphQLOperation:
    """Basic user with skills (home/profile header)."""
    return GraphQLOperation("GetUserById", GET_USER_BY_ID, variables={"id": user_id})


def get_user_onboarding_data(user_id: str) -> GraphQLOperation:
    """Full user aggregate: profile fields, skills, projects, career goals."""
    return GraphQLOperation(
        "GetUserOnboardingData", GET_USER_ONBOARDING_DATA, variables={"id": user_id}
    )


def get_skills() -> GraphQLOperation:
    """Whole skill catalog."""
    return GraphQLOperation("GetSkills", GET_SKILLS)


def get_career_paths() -> GraphQLOperation:
    """Whole career path catalog."""
    return GraphQLOperation("GetCareerPaths", GET_CAREER_PATHS)


def get_skill_details_by_name(name: str) -> GraphQLOperation:
    return GraphQLOperation(
        "GetSkillDetailsByName", GET_SKILL_DETAILS_BY_NAME, variables={"name": name}
    )


def add_user_skill(user_id: str, skill_id: str, level: str) -> GraphQLOperation:
    return GraphQLOperation(
        "AddUserSkill",
        ADD_USER_SKILL,
        OperationKind.MUTATION,
        {"userId": user_id, "skillId": skill_id, "level": level},
    )


def remove_user_skill(user_skill_id: str) -> GraphQLOperation:
    return GraphQLOperation(
        "RemoveUserSkill",
        REMOVE_USER_SKILL,
        OperationKind.MUTATION,
        {"userSkillId": user_skill_id},
    )


def add_user_career_goal(user_id: str, career_path_id: str) -> GraphQLOperation:
    return GraphQLOperation(
        "AddUserCareerGoal",
        ADD_USER_CAREER_GOAL,
        OperationKind.MUTATION,
        {"userId": user_id, "careerPathId": career_path_id},
    )


def remove_user_career_goal(user_id: str, career_path_id: str) -> GraphQLOperation:
    return GraphQLOperation(
        "RemoveUserCareerGoal",
        REMOVE_USER_CAREER_GOAL,
        OperationKind.MUTATION,
        {"userId": user_id, "careerPathId": career_path_id},
    )


def update_user(
    user_id: str,
    *,
    name: str | None = None,
    phone: str | None = None,
    birthday: str | None = None,
    gender: str | None = None,
    profile_image_url: str | None = None,
) -> GraphQLOperation:
    """Partial user update; only arguments that are not None are sent."""
    return GraphQLOperation(
        "UpdateUser",
        UPDATE_USER,
        OperationKind.MUTATION,
        {
            "id": user_id,
            **_present(
                name=name,
                phone=phone,
                birthday=birthday,
                gender=gender,
                profileImageUrl=profile_image_url,
            ),
        },
    )


def login(email: str, password: str) -> GraphQLOperation:
    return GraphQLOperation(
        "Login",
        LOGIN,
        OperationKind.MUTATION,
        {"email": email, "password": password},
    )


def register(email: str, password: str, name: str) -> GraphQLOperation:
    return GraphQLOperation(
        "Register",
        REGISTER,
        OperationKind.MUTATION,
        {"email": email, "password": password, "name": name},
    )
