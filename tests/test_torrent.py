"""
Tests for torrent.py, helpers.py and content_types.py
"""
import json
import logging
import unittest
from xml.sax.saxutils import unescape

from torrdav.content_types import get_content_type
from torrdav.torrent import FileEntry, Torrent, TorrentParser
from torrdav.utils.helpers import (
    escape_xml,
    flatten_file_path,
    format_http_date,
    format_iso_date,
    quote_segment,
)


class TestTorrentParser(unittest.TestCase):
    def setUp(self):
        self.parser = TorrentParser(logging.getLogger('torrdav.tests'))

    def test_parse_embedded_files(self):
        """Files come from the TorrServer.Files list inside data"""
        torrent = self.parser.parse_torrent({
            'hash': 'abc',
            'title': 'Movie',
            'timestamp': 1700000000,
            'data': json.dumps({'TorrServer': {'Files': [
                {'path': 'Movie/movie.mkv', 'length': 1000, 'id': 1},
                {'path': 'Movie/movie.srt', 'length': 20, 'id': 2},
            ]}}),
        })

        self.assertEqual(torrent.hash, 'abc')
        self.assertEqual(torrent.display_name, 'Movie')
        self.assertEqual(torrent.timestamp, 1700000000)
        self.assertEqual(torrent.files, (
            FileEntry(path='Movie/movie.mkv', length=1000, id=1),
            FileEntry(path='Movie/movie.srt', length=20, id=2),
        ))

    def test_display_name_fallbacks(self):
        """Title, then name, then hash"""
        self.assertEqual(Torrent(hash='h', title='T', name='N').display_name, 'T')
        self.assertEqual(Torrent(hash='h', title='', name='N').display_name, 'N')
        self.assertEqual(Torrent(hash='h').display_name, 'h')

    def test_malformed_data_gives_empty_files(self):
        """Invalid JSON in data leaves the torrent browsable with no files"""
        torrent = self.parser.parse_torrent({'hash': 'abc', 'title': 'Broken', 'data': '{not json'})

        self.assertIsNotNone(torrent)
        self.assertEqual(torrent.files, ())

    def test_unexpected_payload_shapes(self):
        """Payloads without TorrServer.Files yield no files"""
        for payload in ['null', '[]', '{}', '{"TorrServer": {}}', '{"TorrServer": {"Files": "x"}}']:
            with self.subTest(payload=payload):
                self.assertEqual(self.parser.parse_files(payload), ())

    def test_missing_data(self):
        """A torrent without data has no files"""
        torrent = self.parser.parse_torrent({'hash': 'abc', 'name': 'Empty'})
        self.assertEqual(torrent.files, ())

    def test_invalid_entries_skipped(self):
        """Entries without a path are ignored, missing lengths become 0"""
        files = self.parser.parse_files(json.dumps({'TorrServer': {'Files': [
            'junk',
            {'length': 5, 'id': 1},
            {'path': 'a.mkv', 'id': 2},
        ]}}))

        self.assertEqual(files, (FileEntry(path='a.mkv', length=0, id=2),))

    def test_already_decoded_payload(self):
        """A data object that is already decoded is accepted"""
        files = self.parser.parse_files({'TorrServer': {'Files': [{'path': 'x.mp4', 'length': 1, 'id': 7}]}})
        self.assertEqual(files[0].id, 7)

    def test_entry_without_hash_skipped(self):
        self.assertIsNone(self.parser.parse_torrent({'title': 'No hash'}))
        self.assertIsNone(self.parser.parse_torrent('not a dict'))

    def test_zero_timestamp_is_absent(self):
        torrent = self.parser.parse_torrent({'hash': 'abc', 'timestamp': 0})
        self.assertIsNone(torrent.timestamp)

    def test_etag(self):
        """ETag is "<hash>-<id>" and stable"""
        torrent = Torrent(hash='abc')
        file_entry = FileEntry(path='a/b.mkv', length=1, id=3)
        self.assertEqual(torrent.etag(file_entry), '"abc-3"')
        self.assertEqual(torrent.etag(file_entry), torrent.etag(file_entry))


class TestHelpers(unittest.TestCase):
    def test_flatten(self):
        self.assertEqual(flatten_file_path('Season 1/Episode 3.mkv'), 'Episode 3.mkv')
        self.assertEqual(flatten_file_path('movie.mkv'), 'movie.mkv')
        self.assertEqual(FileEntry(path='a/b/c.txt', length=0, id=1).display_name, 'c.txt')

    def test_escape_xml(self):
        name = 'Tom & Jerry <"best"> \'ep\''
        escaped = escape_xml(name)

        self.assertEqual(escaped, 'Tom &amp; Jerry &lt;&quot;best&quot;&gt; &apos;ep&apos;')
        self.assertEqual(unescape(escaped, {'&quot;': '"', '&apos;': "'"}), name)

    def test_quote_segment_encodes_slash_and_spaces(self):
        self.assertEqual(quote_segment('AC/DC Live'), 'AC%2FDC%20Live')
        self.assertEqual(quote_segment("It's (2020)"), "It's%20(2020)")

    def test_dates(self):
        self.assertEqual(format_http_date(1700000000), 'Tue, 14 Nov 2023 22:13:20 GMT')
        self.assertEqual(format_iso_date(1700000000.5), '2023-11-14T22:13:20.500Z')

    def test_dates_default_to_now(self):
        self.assertTrue(format_http_date(None).endswith('GMT'))
        self.assertTrue(format_iso_date(0).endswith('Z'))


class TestContentTypes(unittest.TestCase):
    def test_known_extensions(self):
        self.assertEqual(get_content_type('movie.mkv'), 'video/x-matroska')
        self.assertEqual(get_content_type('MOVIE.MP4'), 'video/mp4')
        self.assertEqual(get_content_type('song.flac'), 'audio/flac')
        self.assertEqual(get_content_type('subs.srt'), 'application/x-subrip')
        self.assertEqual(get_content_type('cover.jpeg'), 'image/jpeg')

    def test_unknown_extension(self):
        self.assertEqual(get_content_type('archive.rar'), 'application/octet-stream')
        self.assertEqual(get_content_type('README'), 'application/octet-stream')


if __name__ == '__main__':
    unittest.main()
