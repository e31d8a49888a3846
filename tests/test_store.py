from django.test import TestCase

from apps.errors import NotConnected, StoreError
from apps.store.store import ArtifactStore


def prompt_record(**overrides):
    record = {
        'prompt_id': 'p1',
        'prompt_name': 'Sunset',
        'prompt_text': 'a sunset over mountains',
        'reference_image_data': 'aGVsbG8=',
    }
    record.update(overrides)
    return record


class ArtifactStoreTests(TestCase):
    def setUp(self):
        self.store = ArtifactStore().open()

    def test_operations_before_open_fail(self):
        store = ArtifactStore()
        with self.assertRaises(NotConnected):
            store.find('images')
        with self.assertRaises(NotConnected):
            store.insert('images', prompt_record())
        with self.assertRaises(NotConnected):
            store.collections()

    def test_close_releases_handle(self):
        self.store.close()
        self.assertFalse(self.store.is_open)
        with self.assertRaises(NotConnected):
            self.store.count('images')

    def test_insert_returns_identity(self):
        identity = self.store.insert('images', prompt_record(image_id='img-1'))
        self.assertEqual(identity, 'img-1')

        generated = self.store.insert('generated_images', {
            'prompt_name': 'Text Prompt',
            'prompt_text': 'a cat',
            'result_image_data': 'Y2F0',
        })
        self.assertTrue(generated)
        self.assertEqual(self.store.find('generated_images')[0]['artifact_id'], generated)

    def test_find_returns_documents_in_insertion_order(self):
        self.store.insert('images', prompt_record(prompt_name='First'))
        self.store.insert('images', prompt_record(prompt_name='Second'))
        self.store.insert('images', prompt_record(prompt_id='p2', prompt_name='Other'))

        found = self.store.find('images', {'prompt_id': 'p1'})
        self.assertEqual([d['prompt_name'] for d in found], ['First', 'Second'])
        self.assertNotIn('seq', found[0])

    def test_find_without_match_is_empty(self):
        self.assertEqual(self.store.find('images', {'prompt_id': 'ghost'}), [])

    def test_update_and_remove_report_counts(self):
        self.store.insert('images', prompt_record(image_id='a'))
        self.store.insert('images', prompt_record(image_id='b'))

        self.assertEqual(self.store.update('images', {'prompt_id': 'p1'}, {'prompt_name': 'Dusk'}), 2)
        self.assertEqual(self.store.remove('images', {'image_id': 'a'}), 1)
        self.assertEqual(self.store.remove('images', {'image_id': 'a'}), 0)
        self.assertEqual(self.store.count('images'), 1)
        self.assertEqual(self.store.find('images')[0]['prompt_name'], 'Dusk')

    def test_only_exact_top_level_filters(self):
        with self.assertRaises(StoreError):
            self.store.find('images', {'prompt_id__startswith': 'p'})
        with self.assertRaises(StoreError):
            self.store.find('images', {'colour': 'red'})
        with self.assertRaises(StoreError):
            self.store.find('thumbnails')

    def test_ping(self):
        self.assertEqual(self.store.ping()['status'], 'healthy')
        self.assertEqual(ArtifactStore().ping()['status'], 'unhealthy')
