import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from aura_studio import config
from aura_studio.config import CredentialResolver, check_environment, get_default_strength
from aura_studio.models import EditIntent, RenderConfig, VolcengineConfig
from aura_studio.storage import JsonFileStorage, MemoryStorage

CLEAN_ENV = {
    'GEMINI_API_KEY': '', 'GOOGLE_API_KEY': '', 'VOLCENGINE_API_KEY': '', 'VOLCENGINE_ENDPOINT_ID': '',
}


class TestCredentialResolver(unittest.TestCase):
    def test_environment_fallback(self):
        env = dict(CLEAN_ENV, GOOGLE_API_KEY='g-env', VOLCENGINE_API_KEY='v-env', VOLCENGINE_ENDPOINT_ID='ep-env')
        with patch.dict(os.environ, env):
            resolver = CredentialResolver()
            self.assertEqual(resolver.gemini_api_key(), 'g-env')
            self.assertEqual(resolver.volcengine_config(), VolcengineConfig('v-env', 'ep-env'))

    def test_saved_settings_win_and_are_reread(self):
        storage = MemoryStorage(default=dict)
        resolver = CredentialResolver(storage)
        with patch.dict(os.environ, dict(CLEAN_ENV, GEMINI_API_KEY='g-env')):
            self.assertEqual(resolver.gemini_api_key(), 'g-env')
            resolver.save_gemini_api_key('g-saved')
            self.assertEqual(resolver.gemini_api_key(), 'g-saved')

            resolver.save_volcengine_config(VolcengineConfig('sk-1', 'ep-1'))
            self.assertEqual(storage.load()['volc_config'], {'apiKey': 'sk-1', 'endpointId': 'ep-1'})
            self.assertTrue(resolver.volcengine_config().is_complete)

    def test_settings_file_round_trip(self):
        temp_dir = tempfile.mkdtemp(prefix="aura-config-")
        try:
            storage = JsonFileStorage(os.path.join(temp_dir, 'settings.json'), default=dict)
            CredentialResolver(storage).save_volcengine_config(VolcengineConfig('sk-2', ''))
            with patch.dict(os.environ, CLEAN_ENV):
                self.assertFalse(CredentialResolver(storage).volcengine_config().is_complete)
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)

    def test_check_environment(self):
        with patch.dict(os.environ, dict(CLEAN_ENV, GEMINI_API_KEY='k')):
            self.assertEqual(check_environment(), {'gemini': True, 'volcengine': False})


class TestLoadEnv(unittest.TestCase):
    def test_first_env_file_is_loaded(self):
        temp_dir = tempfile.mkdtemp(prefix="aura-env-")
        try:
            env_path = os.path.join(temp_dir, '.env')
            with open(env_path, 'w', encoding='utf-8') as f:
                f.write("VOLCENGINE_ENDPOINT_ID=ep-from-dotenv\n")
            with patch.dict(os.environ, {}, clear=True):
                self.assertEqual(config.load_env([env_path]), env_path)
                self.assertEqual(os.environ['VOLCENGINE_ENDPOINT_ID'], 'ep-from-dotenv')
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)


class TestSettings(unittest.TestCase):
    def test_default_strength(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_default_strength(), 0.65)
            self.assertEqual(get_default_strength(EditIntent.VIEW_SHIFT), 0.65)

    def test_strength_overrides(self):
        env = {'AURA_DEFAULT_STRENGTH': '0.5', 'AURA_STRENGTH_CREATIVE': '0.9'}
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(get_default_strength(EditIntent.CREATIVE_RESTYLE), 0.9)
            self.assertEqual(get_default_strength(EditIntent.GENERAL_ENHANCE), 0.5)

    def test_render_config_default_strength_follows_setting(self):
        with patch.dict(os.environ, {'AURA_DEFAULT_STRENGTH': '0.4'}, clear=True):
            self.assertEqual(RenderConfig().strength, 0.4)
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(RenderConfig().strength, config.DEFAULT_STRENGTH)
        self.assertEqual(RenderConfig(strength=0.2).strength, 0.2)

    def test_model_and_timeout_settings(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(config.get_gemini_image_model(), 'gemini-2.5-flash-image')
            self.assertEqual(config.get_gemini_high_res_models(), ['gemini-3-pro-image-preview'])
            self.assertIsNone(config.get_volcengine_timeout())
            self.assertEqual(config.get_history_limit(), 10)
        with patch.dict(os.environ, {'VOLCENGINE_TIMEOUT_S': '30', 'GEMINI_HIGH_RES_MODELS': 'a, b'}):
            self.assertEqual(config.get_volcengine_timeout(), 30.0)
            self.assertEqual(config.get_gemini_high_res_models(), ['a', 'b'])


if __name__ == "__main__":
    unittest.main()
