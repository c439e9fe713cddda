"""Pipeline codes and well-known names (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum
from typing import Final


class Stage(IntEnum):
    """Pipeline position of a registered step."""

    PRE_VALIDATION = 10
    PRE_OPERATION = 20
    MAIN_OPERATION = 30
    POST_OPERATION = 40


class Mode(IntEnum):
    SYNCHRONOUS = 0
    ASYNCHRONOUS = 1


class Message(StrEnum):
    CREATE = "Create"
    UPDATE = "Update"
    DELETE = "Delete"
    RETRIEVE = "Retrieve"
    RETRIEVE_MULTIPLE = "RetrieveMultiple"
    ASSOCIATE = "Associate"
    DISASSOCIATE = "Disassociate"
    SET_STATE = "SetState"
    # legacy state change message
    SET_STATE_DYNAMIC_ENTITY = "SetStateDynamicEntity"
    ASSIGN = "Assign"
    GRANT_ACCESS = "GrantAccess"
    MODIFY_ACCESS = "ModifyAccess"
    REVOKE_ACCESS = "RevokeAccess"


class InputParameter(StrEnum):
    TARGET = "Target"
    STATE = "State"
    STATUS = "Status"
    ENTITY_MONIKER = "EntityMoniker"
    RELATIONSHIP = "Relationship"
    RELATED_ENTITIES = "RelatedEntities"
    QUERY = "Query"
    ASSIGNEE = "Assignee"


class AttributeName(StrEnum):
    STATE_CODE = "statecode"
    STATUS_CODE = "statuscode"
    CREATED_ON = "createdon"
    MODIFIED_ON = "modifiedon"
    CREATED_BY = "createdby"
    MODIFIED_BY = "modifiedby"
    OWNER_ID = "ownerid"
    OWNING_BUSINESS_UNIT = "owningbusinessunit"


class ImageName(StrEnum):
    PRE_IMAGE = "PreImage"
    POST_IMAGE = "PostImage"


INITIAL_DEPTH: Final[int] = 1
DEFAULT_MAX_DEPTH: Final[int] = 1
