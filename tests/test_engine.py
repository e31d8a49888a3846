from unittest import mock

from django.test import TestCase

from apps.errors import GatewayError, MissingField, PromptNotFound, StoreError, ValidationError
from apps.gemini.failures import FailureKind, classify_failure
from apps.gemini.schemas import ConnectionStatus, GenerationResult
from apps.generation.engine import GenerationOrchestrator
from apps.store.store import ArtifactStore
from tests.fakes import FakeGateway


class GenerationOrchestratorTests(TestCase):
    def setUp(self):
        self.store = ArtifactStore().open()
        self.gateway = FakeGateway()
        self.orchestrator = GenerationOrchestrator(self.store, self.gateway)

    def add_prompt(self, prompt_id='p1', name='Sunset', text='a sunset over mountains'):
        return self.store.insert('images', {
            'prompt_id': prompt_id,
            'prompt_name': name,
            'prompt_text': text,
            'reference_image_data': 'WA==',
        })

    def test_unknown_prompt_is_not_found_without_side_effects(self):
        self.add_prompt()
        with self.assertRaises(PromptNotFound) as ctx:
            self.orchestrator.generate_from_reference('ghost', 'WQ==')

        debug = ctx.exception.as_payload()['debug']
        self.assertEqual(debug['searchedFor'], 'ghost')
        self.assertEqual(debug['totalImages'], 1)
        self.assertEqual(debug['sampleImage'], {'promptId': 'p1', 'promptName': 'Sunset'})
        self.assertEqual(ctx.exception.code, 'NOT_FOUND')
        self.assertEqual(self.gateway.calls, [])
        self.assertEqual(self.store.count('generated_images'), 0)

    def test_missing_fields(self):
        with self.assertRaises(MissingField) as ctx:
            self.orchestrator.generate_from_reference(None, 'WQ==')
        self.assertEqual(ctx.exception.field, 'promptId')
        with self.assertRaises(MissingField) as ctx:
            self.orchestrator.generate_from_reference('p1', '')
        self.assertEqual(ctx.exception.field, 'referenceImage')
        self.assertEqual(self.gateway.calls, [])

    def test_first_inserted_prompt_wins(self):
        self.add_prompt(name='Sunset', text='a sunset over mountains')
        self.add_prompt(name='Sunrise', text='a sunrise over the sea')

        artifact = self.orchestrator.generate_from_reference('p1', 'WQ==', 'image/png')

        self.assertEqual(self.gateway.calls, [('a sunset over mountains', 'WQ==', 'image/png')])
        stored = self.store.find('generated_images')
        self.assertEqual(len(stored), 1)
        self.assertEqual(stored[0]['artifact_id'], artifact['artifact_id'])
        self.assertEqual(stored[0]['prompt_name'], 'Sunset')
        self.assertEqual(stored[0]['prompt_text'], 'a sunset over mountains')
        self.assertEqual(stored[0]['prompt_id'], 'p1')
        self.assertEqual(stored[0]['source_type'], 'generated')
        self.assertEqual(stored[0]['model_name'], 'fake-model')

    def test_reference_may_come_back_unchanged(self):
        self.add_prompt()
        artifact = self.orchestrator.generate_from_reference('p1', 'WQ==')
        self.assertEqual(artifact['result_image_data'], 'WQ==')

    def test_gateway_failure_is_a_generation_error(self):
        self.add_prompt()
        self.gateway.result = GenerationResult(success=False, failure=classify_failure("429 quota exceeded"))

        with self.assertRaises(GatewayError) as ctx:
            self.orchestrator.generate_from_reference('p1', 'WQ==')

        self.assertEqual(ctx.exception.code, FailureKind.QUOTA_EXCEEDED.value)
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIn('suggestion', ctx.exception.as_payload())
        self.assertEqual(self.store.count('generated_images'), 0)

    def test_failed_insert_fails_the_call(self):
        self.add_prompt()
        with mock.patch.object(self.store, 'insert', side_effect=StoreError('disk full')):
            with self.assertRaises(StoreError):
                self.orchestrator.generate_from_reference('p1', 'WQ==')
        self.assertEqual(len(self.gateway.calls), 1)

    def test_text_generation(self):
        artifact = self.orchestrator.generate_from_text('a cat on a sofa')

        self.assertEqual(self.gateway.calls, [('a cat on a sofa', None, None)])
        stored = self.store.find('generated_images')[0]
        self.assertIsNone(stored['prompt_id'])
        self.assertEqual(stored['prompt_name'], 'Text Prompt')
        self.assertEqual(stored['prompt_text'], 'a cat on a sofa')
        self.assertEqual(stored['original_file_name'], 'ai-text-generated-image.jpg')
        self.assertEqual(artifact['artifact_id'], stored['artifact_id'])

    def test_text_generation_requires_prompt(self):
        for empty in (None, '', '   '):
            with self.assertRaises(MissingField):
                self.orchestrator.generate_from_text(empty)
        self.assertEqual(self.gateway.calls, [])

    def test_non_string_inputs_are_rejected(self):
        self.add_prompt()
        for call in (
            lambda: self.orchestrator.generate_from_text(12345),
            lambda: self.orchestrator.generate_from_text(['a cat']),
            lambda: self.orchestrator.generate_from_reference('p1', 12345),
            lambda: self.orchestrator.generate_from_reference(['p1'], 'WQ=='),
        ):
            with self.assertRaises(ValidationError) as ctx:
                call()
            self.assertEqual(ctx.exception.status_code, 400)
            self.assertNotIsInstance(ctx.exception, MissingField)
        self.assertEqual(self.gateway.calls, [])

    def test_artifact_ids_are_unique(self):
        first = self.orchestrator.generate_from_text('one')
        second = self.orchestrator.generate_from_text('one')
        self.assertNotEqual(first['artifact_id'], second['artifact_id'])

    def test_list_prompts_deduplicates_in_first_seen_order(self):
        self.add_prompt('p2', 'Forest')
        self.add_prompt('p1', 'Sunset')
        self.add_prompt('p2', 'Forest again')
        self.add_prompt('p3', 'Ocean')
        self.add_prompt('p1', 'Sunset again')

        prompts = self.orchestrator.list_prompts()

        self.assertEqual([p['prompt_id'] for p in prompts], ['p2', 'p1', 'p3'])
        self.assertEqual([p['prompt_name'] for p in prompts], ['Forest', 'Sunset', 'Ocean'])

    def test_diagnostics(self):
        self.add_prompt(text='x' * 150)
        self.orchestrator.generate_from_text('a cat')
        self.gateway.connection = ConnectionStatus(connected=False, message='down', error='boom')

        diagnostics = self.orchestrator.get_diagnostics()

        self.assertEqual(diagnostics['database']['totalImages'], 1)
        self.assertEqual(diagnostics['database']['totalGeneratedImages'], 1)
        self.assertEqual(diagnostics['database']['collections'], ['images', 'generated_images'])
        self.assertEqual(diagnostics['database']['sampleImage']['prompt'], 'x' * 100 + '...')
        self.assertFalse(diagnostics['gemini']['connected'])
        self.assertIn('hasGeminiKey', diagnostics['environment'])
