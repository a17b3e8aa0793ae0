from discourse_activity.privacy.metadata import MetadataCollection
from discourse_activity.privacy.provider import DiscoursePrivacyProvider
from discourse_activity.privacy.request import (
    ApprovedContextList, ApprovedUserList, ContextList, CourseContext, ModuleContext, UserList, transform_datetime
)
