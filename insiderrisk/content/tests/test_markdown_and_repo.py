"""
Unit tests for markdown conversion and the content repository mapping.
"""
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from insiderrisk.content import repo
from insiderrisk.db import db
from insiderrisk.content.markdown import markdown_to_html
from insiderrisk.content.types import FeedItem


class TestMarkdown(unittest.TestCase):

    def test_headings(self):
        self.assertEqual(markdown_to_html('# Title\n## Sub\n### Minor'), '<h1>Title</h1>\n<h2>Sub</h2>\n<h3>Minor</h3>')

    def test_bold_and_italic(self):
        self.assertEqual(markdown_to_html('**bold** and *italic*'), '<p><strong>bold</strong> and <em>italic</em></p>')

    def test_paragraphs_split_on_blank_lines(self):
        self.assertEqual(markdown_to_html('one\ntwo\n\nthree'), '<p>one two</p>\n<p>three</p>')

    def test_unordered_and_ordered_lists(self):
        html = markdown_to_html('- a\n- b\n\n1. first\n2. second')
        self.assertEqual(html, '<ul><li>a</li><li>b</li></ul>\n<ol><li>first</li><li>second</li></ol>')

    def test_list_after_paragraph(self):
        self.assertEqual(markdown_to_html('Steps:\n- one'), '<p>Steps:</p>\n<ul><li>one</li></ul>')

    def test_code_block_not_formatted(self):
        html = markdown_to_html('```\n**raw** <b>\n```')
        self.assertEqual(html, '<pre><code>**raw** &lt;b&gt;</code></pre>')

    def test_html_escaped(self):
        self.assertEqual(markdown_to_html('<script>x</script>'), '<p>&lt;script&gt;x&lt;/script&gt;</p>')

    def test_empty(self):
        self.assertEqual(markdown_to_html(''), '')
        self.assertEqual(markdown_to_html(None), '')


class TestContentRepo(unittest.TestCase):

    research_rows = [{
        'slug': 'insider-threat-trends-2025',
        'title': 'The Hidden Enemy',
        'description': 'Comprehensive analysis',
        'authors': ['Dr. Sarah Chen', 'Michael Rodriguez'],
        'tags': ['trends'],
        'featured': True,
        'published_at': datetime(2024, 12, 1, tzinfo=timezone.utc),
    }]
    playbook_rows = [{
        'slug': 'visibility-monitoring',
        'title': 'Visibility & Monitoring',
        'description': None,
        'tags': None,
        'published_at': datetime(2025, 2, 1, tzinfo=timezone.utc),
    }]

    def fake_query(self, query, params=None):
        return self.research_rows if '"Research"' in query else self.playbook_rows

    def test_research_rows_mapped(self):
        with patch.object(repo, 'execute_query', side_effect=self.fake_query):
            items = repo.list_content('research')
        self.assertEqual(items, [FeedItem(
            title='The Hidden Enemy',
            slug='insider-threat-trends-2025',
            description='Comprehensive analysis',
            published_at=datetime(2024, 12, 1, tzinfo=timezone.utc),
            authors=['Dr. Sarah Chen', 'Michael Rodriguez'],
            tags=['trends'],
            kind='research',
            featured=True,
        )])

    def test_playbook_nulls_defaulted(self):
        with patch.object(repo, 'execute_query', side_effect=self.fake_query):
            item = repo.list_content('playbooks')[0]
        self.assertEqual(item.description, '')
        self.assertEqual(item.tags, [])
        self.assertEqual(item.authors, [])
        self.assertIsNone(item.author)
        self.assertEqual(item.path, '/playbooks/visibility-monitoring')
        self.assertEqual(item.item_id, 'playbook-visibility-monitoring')

    def test_all_is_newest_first(self):
        with patch.object(repo, 'execute_query', side_effect=self.fake_query):
            items = repo.list_content('all')
        self.assertEqual([i.slug for i in items], ['visibility-monitoring', 'insider-threat-trends-2025'])

    def test_limit_passed_to_query(self):
        with patch.object(repo, 'execute_query', side_effect=self.fake_query) as mock_query:
            repo.list_content('research', limit=5)
        self.assertEqual(mock_query.call_args[0][1], (5,))

    def test_unknown_kind(self):
        with self.assertRaises(ValueError):
            repo.list_content('glossary')


class TestReadOnlyQueries(unittest.TestCase):

    @patch.dict('os.environ', {'DATABASE_URL': 'postgresql://localhost/insiderrisk'})
    def test_execute_query_never_commits(self):
        conn = MagicMock()
        conn.cursor.return_value.fetchall.return_value = [{'slug': 'a'}]
        with patch.object(db.psycopg2, 'connect', return_value=conn):
            rows = db.execute_query('SELECT slug FROM "Research"')
        self.assertEqual(rows, [{'slug': 'a'}])
        conn.commit.assert_not_called()
        conn.close.assert_called_once()

    @patch.dict('os.environ', {'DATABASE_URL': 'postgresql://localhost/insiderrisk'})
    def test_failed_query_rolls_back(self):
        conn = MagicMock()
        conn.cursor.return_value.execute.side_effect = RuntimeError("relation does not exist")
        with patch.object(db.psycopg2, 'connect', return_value=conn):
            with self.assertRaises(RuntimeError):
                db.execute_query('SELECT 1')
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()


if __name__ == '__main__':
    unittest.main()
