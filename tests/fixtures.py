import botocore.client
import contextlib
import dataclasses
import datetime
from awslabs.aws_blocks.core.common.models import (
    AppConfig,
    Credentials,
    InputField,
    OperationDescriptor,
)
from typing import Any
from unittest.mock import patch


BASE_CREDENTIALS = Credentials(
    access_key_id='AKIDBASE', secret_access_key='base-secret', session_token=None
)

TEST_APP_CONFIG = AppConfig(
    access_key_id='AKIDBASE', secret_access_key='base-secret', endpoint=None
)

ROLE_ARN = 'arn:aws:iam::123456789012:role/FlowsExecutionRole'

ASSUME_ROLE_RESPONSE = {
    'Credentials': {
        'AccessKeyId': 'ASIATEMP',
        'SecretAccessKey': 'temp-secret',
        'SessionToken': 'temp-token',
        'Expiration': datetime.datetime(2030, 1, 1, tzinfo=datetime.timezone.utc),
    },
    'AssumedRoleUser': {
        'AssumedRoleId': 'AROATEST:flows-session-1',
        'Arn': 'arn:aws:sts::123456789012:assumed-role/FlowsExecutionRole/flows-session-1',
    },
    'ResponseMetadata': {'HTTPStatusCode': 200},
}

GET_INVALIDATION_RESPONSE = {
    'Invalidation': {
        'Id': 'I2J0I21PCUYOIK',
        'Status': 'Completed',
        'CreateTime': datetime.datetime(2024, 5, 1, 12, 30, tzinfo=datetime.timezone.utc),
        'InvalidationBatch': {
            'Paths': {'Quantity': 1, 'Items': ['/*']},
            'CallerReference': 'flows-1714566600',
        },
    },
    'ResponseMetadata': {'HTTPStatusCode': 200},
}

GET_INVALIDATION_DESCRIPTOR = OperationDescriptor(
    name='Get Invalidation',
    description='Get the information about an invalidation.',
    service='cloudfront',
    operation='GetInvalidation',
    inputs={
        'DistributionId': InputField(
            name='Distribution Id',
            description="The distribution's ID.",
            type='string',
            required=True,
        ),
        'Id': InputField(
            name='Id',
            description="The identifier for the invalidation request, for example, IDFDVBD632BHDS5.",
            type='string',
            required=True,
        ),
    },
    output={
        'name': 'Get Invalidation Result',
        'description': 'Result from GetInvalidation operation',
        'schema': {'type': 'object', 'additionalProperties': True},
    },
)

LIST_OBJECTS_DESCRIPTOR = OperationDescriptor(
    name='List Objects V2',
    description='Returns some or all of the objects in a bucket.',
    service='s3',
    operation='ListObjectsV2',
    inputs={
        'Bucket': InputField(name='Bucket', description='The bucket name.', type='string', required=True),
        'MaxKeys': InputField(name='Max Keys', description='Maximum keys.', type='number'),
        'FetchOwner': InputField(name='Fetch Owner', description='Return the owner.', type='boolean'),
        'OptionalObjectAttributes': InputField(
            name='Optional Object Attributes',
            description='Optional fields to return.',
            type={'type': 'array', 'items': {'type': 'string'}},
        ),
    },
    output={
        'name': 'List Objects V2 Result',
        'description': 'Result from ListObjectsV2 operation',
        'schema': {'type': 'object', 'additionalProperties': True},
    },
    serializeResponse=True,
)


@dataclasses.dataclass
class RecordedCall:
    """A single API call seen by the patched botocore client."""

    service: str
    operation: str
    parameters: dict[str, Any]
    region: str
    access_key: str
    session_token: str | None
    endpoint_url: str


@contextlib.contextmanager
def patch_boto3(responses: dict[str, Any]):
    """Context manager to patch boto3 API calls.

    Responses are looked up by operation name. A response that is an exception
    is raised instead of being returned. Yields the list of recorded calls.
    """
    calls: list[RecordedCall] = []

    def mock_make_api_call(self, operation_name, kwarg):
        credentials = self._request_signer._credentials
        calls.append(
            RecordedCall(
                service=self.meta.service_model.service_name,
                operation=operation_name,
                parameters=kwarg,
                region=self.meta.region_name,
                access_key=credentials.access_key,
                session_token=credentials.token,
                endpoint_url=self.meta.endpoint_url,
            )
        )
        response = responses[operation_name]
        if isinstance(response, Exception):
            raise response
        return response

    with patch.object(botocore.client.BaseClient, '_make_api_call', new=mock_make_api_call):
        yield calls
