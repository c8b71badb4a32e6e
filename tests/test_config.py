"""
Tests for configuration loading.
"""
import pytest

from bucket_deploy.models.config import S3Config, DeployConfig


class TestS3Config:
    """Test cases for S3Config."""

    def test_from_env(self, monkeypatch):
        """Test prefixed variables are read."""
        monkeypatch.setenv('DEPLOY_S3_ENDPOINT', 'http://localhost:9000')
        monkeypatch.setenv('DEPLOY_S3_ACCESS_KEY', 'key')
        monkeypatch.setenv('DEPLOY_S3_SECRET_KEY', 'secret')
        monkeypatch.setenv('DEPLOY_S3_BUCKET', 'site-bucket')
        monkeypatch.setenv('DEPLOY_S3_REGION', 'eu-west-1')

        config = S3Config.from_env('DEPLOY')

        assert config == S3Config(
            endpoint='http://localhost:9000',
            access_key='key',
            secret_key='secret',
            bucket='site-bucket',
            region='eu-west-1'
        )

    def test_aws_credential_fallback(self, monkeypatch):
        """Test the standard AWS variables are used when prefixed ones are missing."""
        monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'aws-key')
        monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'aws-secret')

        config = S3Config.from_env('DEPLOY')

        assert config.access_key == 'aws-key'
        assert config.secret_key == 'aws-secret'
        assert config.endpoint == ''
        assert config.region is None


class TestDeployConfig:
    """Test cases for DeployConfig."""

    def test_defaults(self):
        """Test defaults match the deploy tool's behaviour."""
        config = DeployConfig.from_env()

        assert config.source_dir == 'build'
        assert config.thread_count == 8
        assert config.key_prefix == ''
        assert config.acl == 'public-read'
        assert config.log_file is None

    def test_from_env(self, monkeypatch):
        """Test deploy settings are read from the environment."""
        monkeypatch.setenv('DEPLOY_SOURCE_DIR', '_site')
        monkeypatch.setenv('DEPLOY_THREADS', '20')
        monkeypatch.setenv('DEPLOY_KEY_PREFIX', 'docs')
        monkeypatch.setenv('DEPLOY_ACL', 'private')
        monkeypatch.setenv('DEPLOY_LOG_FILE', 'deploy.log')

        config = DeployConfig.from_env()

        assert config.source_dir == '_site'
        assert config.thread_count == 20
        assert config.key_prefix == 'docs'
        assert config.acl == 'private'
        assert config.log_file == 'deploy.log'

    def test_invalid_thread_count(self, s3_config):
        """Test thread counts below one are rejected."""
        with pytest.raises(ValueError):
            DeployConfig(s3=s3_config, thread_count=0)
