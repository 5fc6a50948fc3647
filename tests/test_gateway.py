import unittest
from unittest.mock import patch, MagicMock
import os
import sys

import httpx
import openai

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from campus_events.errors import GatewayTimeout, GatewayUnavailable
from campus_events.services.assembler import PromptPayload
from campus_events.services.gateway import CompletionGateway, build_gateway


def _completion(content):
    return MagicMock(choices=[MagicMock(message=MagicMock(content=content))])


class TestCompletionGateway(unittest.TestCase):

    def setUp(self):
        self.client = MagicMock()
        self.gateway = CompletionGateway(self.client, model="test-model", timeout=5.0, temperature=0.1)
        self.payload = PromptPayload(messages=[{"role": "user", "content": "hi"}])
        self.request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")

    def test_complete_returns_message_content(self):
        self.client.chat.completions.create.return_value = _completion("Hello there")

        self.assertEqual(self.gateway.complete(self.payload), "Hello there")
        self.client.chat.completions.create.assert_called_once_with(
            model="test-model",
            messages=self.payload.messages,
            temperature=0.1,
            timeout=5.0,
        )

    def test_timeout_is_mapped(self):
        self.client.chat.completions.create.side_effect = openai.APITimeoutError(request=self.request)

        with self.assertRaises(GatewayTimeout) as ctx:
            self.gateway.complete(self.payload)
        self.assertIsInstance(ctx.exception, GatewayUnavailable)
        self.assertIsInstance(ctx.exception.cause, openai.APITimeoutError)

    def test_api_errors_are_mapped(self):
        self.client.chat.completions.create.side_effect = openai.APIConnectionError(request=self.request)

        with self.assertRaises(GatewayUnavailable) as ctx:
            self.gateway.complete(self.payload)
        self.assertNotIsInstance(ctx.exception, GatewayTimeout)

    def test_empty_completion_is_unavailable(self):
        self.client.chat.completions.create.return_value = _completion(None)
        with self.assertRaises(GatewayUnavailable):
            self.gateway.complete(self.payload)

    @patch('campus_events.services.gateway.get_openai')
    def test_build_gateway_uses_singleton_client(self, mock_get_openai):
        mock_client = MagicMock()
        mock_get_openai.return_value = mock_client

        gateway = build_gateway()

        mock_get_openai.assert_called_once()
        mock_client.chat.completions.create.return_value = _completion("ok")
        self.assertEqual(gateway.complete(self.payload), "ok")


if __name__ == '__main__':
    unittest.main()
