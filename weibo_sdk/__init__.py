"""
weibo_sdk
─────────
Stable top-level exports. Import from here, not from sub-modules directly.
Every name exported here is part of the public API and subject to semver.
"""
from weibo_sdk.tier0_core.logging import get_logger
from weibo_sdk.tier0_core.errors import (
    WeiboError,
    ValidationError,
    EmptyBatchError,
    BatchSizeExceeded,
    MissingCredentialError,
    NetworkError,
    HttpStatusError,
    ConfigurationError,
    UnknownOperationError,
    RequestStateError,
)
from weibo_sdk.tier0_core.config import get_config, WeiboConfig
from weibo_sdk.tier0_core.credentials import AccessToken
from weibo_sdk.tier0_core.http import Success, Failure, OutcomeKind, OutcomeEnvelope
from weibo_sdk.tier0_core.params import ParameterBag, encode_bool_as_int, join_ids

from weibo_sdk.tier1_runtime.validate import AuthorFilter, SourceFilter, Feature, TypeFilter
from weibo_sdk.tier1_runtime.executor import (
    HttpExecutor,
    HttpRequest,
    RawResponse,
    HttpxExecutor,
    MockExecutor,
)
from weibo_sdk.tier1_runtime.dispatch import Dispatcher, RequestDescriptor, build_request

from weibo_sdk.tier3_platform.endpoints import (
    ApiGroup,
    Operation,
    EndpointDescriptor,
    EndpointTable,
    build_endpoint_table,
)
from weibo_sdk.tier3_platform.comments import CommentsAPI
from weibo_sdk.tier3_platform.statuses import StatusesAPI
from weibo_sdk.tier3_platform.users import UsersAPI
from weibo_sdk.tier3_platform.invite import InviteAPI
from weibo_sdk.tier3_platform.logout import LogoutAPI

from weibo_sdk.client import WeiboClient

__version__ = "0.1.0"
__all__ = [
    # logging
    "get_logger",
    # errors
    "WeiboError", "ValidationError", "EmptyBatchError", "BatchSizeExceeded",
    "MissingCredentialError", "NetworkError", "HttpStatusError",
    "ConfigurationError", "UnknownOperationError", "RequestStateError",
    # config
    "get_config", "WeiboConfig",
    # credentials
    "AccessToken",
    # outcomes
    "Success", "Failure", "OutcomeKind", "OutcomeEnvelope",
    # params
    "ParameterBag", "encode_bool_as_int", "join_ids",
    # filters
    "AuthorFilter", "SourceFilter", "Feature", "TypeFilter",
    # executor
    "HttpExecutor", "HttpRequest", "RawResponse", "HttpxExecutor", "MockExecutor",
    # dispatch
    "Dispatcher", "RequestDescriptor", "build_request",
    # endpoints
    "ApiGroup", "Operation", "EndpointDescriptor", "EndpointTable", "build_endpoint_table",
    # api groups
    "CommentsAPI", "StatusesAPI", "UsersAPI", "InviteAPI", "LogoutAPI",
    # client
    "WeiboClient",
]
