import pytest
from awslabs.aws_blocks.server import describe_block, list_blocks, main, run_block, server
from botocore.exceptions import ClientError, NoCredentialsError
from tests.fixtures import (
    ASSUME_ROLE_RESPONSE,
    GET_INVALIDATION_RESPONSE,
    ROLE_ARN,
    TEST_APP_CONFIG,
    patch_boto3,
)
from unittest.mock import MagicMock, patch


def test_list_blocks():
    """Test that every packaged block is listed."""
    result = list_blocks()

    ids = [block['id'] for block in result['blocks']]
    assert 'cloudfront.getInvalidation' in ids
    assert 'sqs.sendMessageBatch' in ids


def test_list_blocks_for_app():
    """Test listing the blocks of one app."""
    result = list_blocks('kms')

    assert sorted(block['id'] for block in result['blocks']) == [
        'kms.decrypt',
        'kms.encrypt',
        'kms.listGrants',
    ]
    assert all(block['name'] and block['description'] for block in result['blocks'])


def test_describe_block():
    """Test describing a block."""
    result = describe_block('cloudfront.getInvalidation')

    assert result['operation'] == 'GetInvalidation'
    assert result['inputs']['required'] == ['region', 'DistributionId', 'Id']


def test_describe_unknown_block():
    """Test describing a block that does not exist."""
    result = describe_block('cloudfront.unknown')

    assert result == {'error': True, 'detail': "The block 'cloudfront.unknown' does not exist."}


@patch('awslabs.aws_blocks.server.DEFAULT_REGION', 'us-east-1')
@patch('awslabs.aws_blocks.server.get_app_config')
async def test_run_block_success(mock_get_app_config):
    """Test running a block with the default region and an assumed role."""
    mock_get_app_config.return_value = TEST_APP_CONFIG
    responses = {'AssumeRole': ASSUME_ROLE_RESPONSE, 'GetInvalidation': GET_INVALIDATION_RESPONSE}

    with patch_boto3(responses) as calls:
        result = await run_block(
            'cloudfront.getInvalidation',
            {'assumeRoleArn': ROLE_ARN, 'DistributionId': 'E2QWRUHAPOMQZL', 'Id': 'I2J0I21PCUYOIK'},
        )

    assert result['block_id'] == 'cloudfront.getInvalidation'
    assert result['response']['Invalidation']['CreateTime'] == '2024-05-01T12:30:00+00:00'
    assert [call.region for call in calls] == ['us-east-1', 'us-east-1']


@patch('awslabs.aws_blocks.server.DEFAULT_REGION', 'us-east-1')
@patch('awslabs.aws_blocks.server.get_app_config')
async def test_run_block_keeps_explicit_region(mock_get_app_config):
    """Test that an explicit region wins over the default region."""
    mock_get_app_config.return_value = TEST_APP_CONFIG

    with patch_boto3({'GetInvalidation': GET_INVALIDATION_RESPONSE}) as calls:
        await run_block(
            'cloudfront.getInvalidation',
            {'region': 'ap-southeast-2', 'DistributionId': 'D', 'Id': 'I'},
        )

    assert calls[0].region == 'ap-southeast-2'


async def test_run_unknown_block():
    """Test running a block that does not exist."""
    result = await run_block('cloudfront.unknown', {})

    assert result == {'error': True, 'detail': "The block 'cloudfront.unknown' does not exist."}


@patch('awslabs.aws_blocks.server.DEFAULT_REGION', 'us-east-1')
@patch('awslabs.aws_blocks.server.get_app_config')
async def test_run_block_invalid_input(mock_get_app_config):
    """Test that validation errors are returned as an error response."""
    mock_get_app_config.return_value = TEST_APP_CONFIG

    with patch_boto3({}) as calls:
        result = await run_block('cloudfront.getInvalidation', {'DistributionId': 'D'})

    assert result['error'] is True
    assert "'Id' is a required property" in result['detail']
    assert calls == []


@patch('awslabs.aws_blocks.server.DEFAULT_REGION', 'us-east-1')
@patch('awslabs.aws_blocks.server.get_app_config')
async def test_run_block_no_credentials(mock_get_app_config):
    """Test the error returned when no credentials are configured."""
    mock_get_app_config.side_effect = NoCredentialsError()

    result = await run_block('cloudfront.getInvalidation', {'DistributionId': 'D', 'Id': 'I'})

    assert result['error'] is True
    assert 'No AWS credentials found' in result['detail']


@patch('awslabs.aws_blocks.server.DEFAULT_REGION', 'us-east-1')
@patch('awslabs.aws_blocks.server.get_app_config')
async def test_run_block_service_error(mock_get_app_config):
    """Test that service errors keep their code and status."""
    mock_get_app_config.return_value = TEST_APP_CONFIG
    error = ClientError(
        {
            'Error': {'Code': 'NoSuchInvalidation', 'Message': 'The specified invalidation does not exist.'},
            'ResponseMetadata': {'HTTPStatusCode': 404},
        },
        'GetInvalidation',
    )

    with patch_boto3({'GetInvalidation': error}):
        result = await run_block('cloudfront.getInvalidation', {'DistributionId': 'D', 'Id': 'I'})

    assert result['error'] is True
    assert result['code'] == 'NoSuchInvalidation'
    assert result['status'] == 404
    assert 'The specified invalidation does not exist.' in result['detail']


@patch('awslabs.aws_blocks.server.DEFAULT_REGION', 'us-east-1')
@patch('awslabs.aws_blocks.server.get_app_config')
async def test_run_block_unexpected_error(mock_get_app_config):
    """Test that unexpected errors are returned as an error response."""
    mock_get_app_config.side_effect = RuntimeError('boom')

    result = await run_block('cloudfront.getInvalidation', {'DistributionId': 'D', 'Id': 'I'})

    assert result == {'error': True, 'detail': 'Error while running the block: boom'}


async def test_run_block_description_names_the_region_setting():
    """Test that the tool description does not depend on the environment at import."""
    tools = {tool.name: tool for tool in await server.list_tools()}

    description = tools['run_block'].description
    assert 'AWS_REGION' in description
    assert 'None' not in description


@patch('awslabs.aws_blocks.server.server')
@patch('awslabs.aws_blocks.server.get_block_registry')
def test_main_runs_stdio_server(mock_get_block_registry, mock_server):
    """Test that main loads the registry and serves over stdio."""
    registry = MagicMock(blocks={}, apps=MagicMock(return_value=[]))
    registry.pretty_print_blocks.return_value = '* cloudfront.getInvalidation : Get Invalidation'
    mock_get_block_registry.return_value = registry

    with patch.dict('os.environ', {'AWS_REGION': 'us-east-1'}):
        main()

    mock_get_block_registry.assert_called_once()
    registry.pretty_print_blocks.assert_called_once()
    mock_server.run.assert_called_once_with(transport='stdio')


@patch('awslabs.aws_blocks.server.server')
def test_main_requires_region(mock_server):
    """Test that main refuses to start without a region."""
    with patch.dict('os.environ', {}, clear=True):
        with pytest.raises(ValueError, match='AWS_REGION'):
            main()

    mock_server.run.assert_not_called()
