import pytest
from unittest.mock import patch, mock_open

from orka_builder.config import OrkaConfig, load_config, load_token


class TestOrkaConfig:

    def test_packer_style_keys(self):
        config = OrkaConfig(orka_endpoint='http://10.221.188.100/', no_create_image=True, image_precopy=True)

        assert config.endpoint == 'http://10.221.188.100'
        assert config.skip_image_creation is True
        assert config.use_precopy is True
        assert config.image_name == ''

    def test_defaults(self):
        config = OrkaConfig(endpoint='https://orka.example.com', image_name='golden.img')

        assert config.skip_image_creation is False
        assert config.use_precopy is False

    def test_invalid_endpoint(self):
        with pytest.raises(ValueError, match="Invalid endpoint"):
            OrkaConfig(endpoint='orka.example.com', image_name='golden.img')

    def test_save_requires_image_name(self):
        with pytest.raises(ValueError, match="image_name is required"):
            OrkaConfig(endpoint='http://orka.example.com')

    def test_precopy_without_image_name(self):
        config = OrkaConfig(endpoint='http://orka.example.com', use_precopy=True)

        assert config.image_name == ''


class TestLoadConfig:

    @patch('builtins.open', new_callable=mock_open,
           read_data='orka:\n  orka_endpoint: http://orka.example.com\n  image_name: golden.img\n')
    def test_load_config_from_path(self, mock_file):
        config = load_config('/etc/orka/config.yaml')

        mock_file.assert_called_with('/etc/orka/config.yaml', 'r')
        assert config.endpoint == 'http://orka.example.com'
        assert config.image_name == 'golden.img'

    @patch('os.getenv')
    @patch('builtins.open', new_callable=mock_open,
           read_data='orka:\n  endpoint: http://orka.example.com\n  image_precopy: true\n')
    def test_load_config_from_env(self, mock_file, mock_getenv):
        mock_getenv.return_value = '/custom/config.yaml'

        config = load_config()

        mock_file.assert_called_with('/custom/config.yaml', 'r')
        assert config.use_precopy is True

    @patch('builtins.open', new_callable=mock_open, read_data='orka:\n  endpoint: http://orka.example.com\n')
    def test_load_config_invalid(self, mock_file):
        with pytest.raises(ValueError, match="Invalid config"):
            load_config('/etc/orka/config.yaml')


class TestLoadToken:

    @patch('builtins.open', new_callable=mock_open, read_data='  secret-token\n')
    def test_load_token(self, mock_file):
        assert load_token('/etc/orka/token') == 'secret-token'

    @patch('builtins.open', new_callable=mock_open, read_data='\n')
    def test_load_token_empty(self, mock_file):
        with pytest.raises(ValueError, match="is empty"):
            load_token('/etc/orka/token')
