from blog_api.auth.identity import (
    RequiredSubjectDep,
    Subject,
    SubjectDep,
    extract_credential,
    get_required_subject,
    get_subject,
    require_subject,
    resolve_subject,
)
from blog_api.auth.permissions import BlogAction, can_perform, is_owner

__all__ = [
    "BlogAction",
    "RequiredSubjectDep",
    "Subject",
    "SubjectDep",
    "can_perform",
    "extract_credential",
    "get_required_subject",
    "get_subject",
    "is_owner",
    "require_subject",
    "resolve_subject",
]
