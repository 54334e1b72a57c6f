import json
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from aura_studio.history import HistoryStore
from aura_studio.models import Engine, HistoryItem
from aura_studio.storage import JsonFileStorage, MemoryStorage


def make_item(n):
    return HistoryItem(
        id=str(n),
        timestamp=1700000000000 + n,
        original_image=f"data:image/png;base64,orig{n}",
        generated_image=f"https://cdn.example.com/{n}.png",
        prompt=f"prompt {n}",
        engine=Engine.SECONDARY if n % 2 else Engine.PRIMARY,
        resolution='2K',
        aspect_ratio='16:9',
    )


class TestHistoryStore(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp(prefix="aura-history-")
        self.path = os.path.join(self.temp_dir, "history.json")
        self.store = HistoryStore(JsonFileStorage(self.path), limit=10)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_newest_first_and_capped(self):
        for n in range(11):
            self.store.add(make_item(n))
        items = self.store.items()
        self.assertEqual(len(items), 10)
        self.assertEqual(items[0].id, '10')
        self.assertEqual(items[-1].id, '1')
        self.assertIsNone(self.store.get('0'))

    def test_persisted_record_keys(self):
        self.store.add(make_item(3))
        with open(self.path, encoding='utf-8') as f:
            records = json.load(f)
        self.assertEqual(records[0]['engine'], 'SEEDREAM')
        self.assertEqual(records[0]['aspectRatio'], '16:9')
        self.assertEqual(records[0]['generated'], "https://cdn.example.com/3.png")

    def test_reload_from_disk(self):
        self.store.add(make_item(1))
        reloaded = HistoryStore(JsonFileStorage(self.path), limit=10)
        self.assertEqual(reloaded.items()[0], make_item(1))

    def test_delete(self):
        self.store.add(make_item(1))
        self.store.add(make_item(2))
        self.assertEqual([i.id for i in self.store.delete('1')], ['2'])
        self.assertEqual([i.id for i in self.store.delete('missing')], ['2'])

    def test_clear_survives_reload(self):
        self.store.add(make_item(1))
        self.store.clear()
        self.assertEqual(self.store.items(), [])
        self.assertEqual(HistoryStore(JsonFileStorage(self.path)).items(), [])

    def test_corrupted_file_reads_as_empty(self):
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write("{not json")
        self.assertEqual(self.store.items(), [])

    def test_unreadable_records_are_skipped(self):
        storage = MemoryStorage([{'prompt': 'no id'}, make_item(4).to_dict()])
        items = HistoryStore(storage).items()
        self.assertEqual([i.id for i in items], ['4'])

    def test_write_failure_keeps_only_latest(self):
        storage = MemoryStorage()
        store = HistoryStore(storage, limit=10)
        store.add(make_item(1))

        original_save = storage.save

        def save(value):
            if len(value) > 1:
                raise OSError("No space left on device")
            original_save(value)

        with patch.object(storage, 'save', side_effect=save):
            updated = store.add(make_item(2))
        self.assertEqual([i.id for i in updated], ['2'])
        self.assertEqual([i.id for i in store.items()], ['2'])

    def test_record_builds_item(self):
        item = self.store.record("orig", "gen", "p", Engine.PRIMARY, '1K', '1:1')
        self.assertTrue(item.id)
        self.assertEqual(self.store.items()[0].id, item.id)


if __name__ == "__main__":
    unittest.main()
