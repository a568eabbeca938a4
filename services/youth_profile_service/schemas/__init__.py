"""Youth Profile Service schemas package.

Re-exports all schemas so that routers and services use a single import
namespace.

Schema files:
  - schemas/profile.py    — stored profile snapshot
  - schemas/draft.py      — editable Draft and AddressListModel
  - schemas/requests.py   — outgoing create/update/resend payloads
  - schemas/validation.py — field errors and age policy flags
  - schemas/api.py        — HTTP request/response bodies
"""

from services.youth_profile_service.schemas.api import (  # noqa: F401
    DraftEvaluationRequest,
    FieldRulesResponse,
    FormatAddressRequest,
    FormatAddressResponse,
    SubmitRequest,
    UpdateRequestBody,
    ValidationResponse,
)
from services.youth_profile_service.schemas.draft import (  # noqa: F401
    AddressDraft,
    AddressListModel,
    AddressSnapshot,
    Draft,
)
from services.youth_profile_service.schemas.profile import (  # noqa: F401
    Profile,
    ProfileAddress,
    ProfileEmail,
    ProfilePhone,
    YouthProfileData,
)
from services.youth_profile_service.schemas.requests import (  # noqa: F401
    AddressUpdate,
    CreateRequest,
    PhoneUpdate,
    ProfileCreate,
    ProfileUpdate,
    ResendNotificationInput,
    ResendNotificationRequest,
    UpdateRequest,
    YouthProfileUpdate,
)
from services.youth_profile_service.schemas.validation import (  # noqa: F401
    AgePolicyFlags,
    FieldError,
)
