"""
Unit tests for IndexNow submission, robots.txt and canonical URLs.
"""
import logging
import unittest
from datetime import date
from unittest.mock import MagicMock

import requests

from insiderrisk.config import SiteConfig
from insiderrisk.seo import indexnow
from insiderrisk.seo.robots import render_robots
from insiderrisk.utils.canonical import build_canonical_url, strip_tracking_params

ENABLED = SiteConfig(
    site_url='https://insiderisk.io',
    indexnow_enabled=True,
    indexnow_key='abc123',
)


def response(status_code, reason='OK'):
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = reason
    return resp


class TestIndexNowSingle(unittest.TestCase):

    def test_success_makes_url_absolute(self):
        session = MagicMock()
        session.get.return_value = response(200)

        self.assertTrue(indexnow.submit_url('/research/new-report', ENABLED, session=session))

        args, kwargs = session.get.call_args
        self.assertEqual(args[0], 'https://www.bing.com/IndexNow')
        self.assertEqual(kwargs['params'], {'url': 'https://insiderisk.io/research/new-report', 'key': 'abc123'})
        self.assertEqual(kwargs['timeout'], ENABLED.indexnow_timeout)

    def test_accepted_counts_as_success(self):
        session = MagicMock()
        session.get.return_value = response(202, 'Accepted')
        self.assertTrue(indexnow.submit_url('https://insiderisk.io/', ENABLED, session=session))

    def test_http_error_returns_false(self):
        session = MagicMock()
        session.get.return_value = response(403, 'Forbidden')
        with self.assertLogs('insiderrisk.seo.indexnow', level=logging.WARNING):
            self.assertFalse(indexnow.submit_url('/', ENABLED, session=session))

    def test_network_error_returns_false(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError('boom')
        with self.assertLogs('insiderrisk.seo.indexnow', level=logging.ERROR):
            self.assertFalse(indexnow.submit_url('/', ENABLED, session=session))

    def test_disabled_skips_request(self):
        session = MagicMock()
        self.assertFalse(indexnow.submit_url('/', SiteConfig(), session=session))
        session.get.assert_not_called()

    def test_missing_key_skips_request(self):
        session = MagicMock()
        config = SiteConfig(indexnow_enabled=True)
        self.assertFalse(indexnow.submit_url('/', config, session=session))
        session.get.assert_not_called()


class TestIndexNowBulk(unittest.TestCase):

    def test_payload(self):
        session = MagicMock()
        session.post.return_value = response(200)

        self.assertTrue(indexnow.submit_urls(['/', '/assessment'], ENABLED, session=session))

        kwargs = session.post.call_args[1]
        self.assertEqual(kwargs['json'], {
            'host': 'insiderisk.io',
            'key': 'abc123',
            'urlList': ['https://insiderisk.io', 'https://insiderisk.io/assessment'],
        })

    def test_caps_url_count(self):
        session = MagicMock()
        session.post.return_value = response(200)
        urls = [f'/research/{i}' for i in range(indexnow.MAX_URLS_PER_SUBMISSION + 5)]
        indexnow.submit_urls(urls, ENABLED, session=session)
        self.assertEqual(len(session.post.call_args[1]['json']['urlList']), indexnow.MAX_URLS_PER_SUBMISSION)

    def test_empty_list_is_noop(self):
        session = MagicMock()
        self.assertTrue(indexnow.submit_urls([], ENABLED, session=session))
        session.post.assert_not_called()

    def test_failure(self):
        session = MagicMock()
        session.post.side_effect = requests.Timeout('slow')
        with self.assertLogs('insiderrisk.seo.indexnow', level=logging.ERROR):
            self.assertFalse(indexnow.submit_urls(['/'], ENABLED, session=session))


class TestRobots(unittest.TestCase):

    def test_development_blocks_everything(self):
        self.assertIn('Disallow: /\n', render_robots(SiteConfig(environment='development')))

    def test_production(self):
        config = SiteConfig(environment='production')
        robots = render_robots(config, today=date(2026, 10, 18))
        self.assertIn('# Last updated: 2026-10-18', robots)
        self.assertIn('Allow: /\nCrawl-delay: 5', robots)
        self.assertIn('Disallow: /api/', robots)
        self.assertIn('Sitemap: https://insiderisk.io/sitemap.xml', robots)
        self.assertIn('User-agent: GPTBot', robots)


class TestCanonical(unittest.TestCase):

    def test_trailing_slash_removed(self):
        self.assertEqual(build_canonical_url('/research/', host='https://insiderisk.io'), 'https://insiderisk.io/research')

    def test_root(self):
        self.assertEqual(build_canonical_url('', host='https://insiderisk.io/'), 'https://insiderisk.io/')

    def test_tracking_params_stripped(self):
        url = build_canonical_url('/results/share', 'data=abc&utm_source=x&gclid=1', host='https://insiderisk.io')
        self.assertEqual(url, 'https://insiderisk.io/results/share?data=abc')

    def test_only_tracking_params(self):
        self.assertEqual(strip_tracking_params('utm_campaign=y&fbclid=2'), '')


if __name__ == '__main__':
    unittest.main()
