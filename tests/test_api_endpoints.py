"""
API endpoint regression tests

Feeds, sitemaps and share links through the FastAPI app, with the content
collaborator replaced by in-memory fakes.
"""
import base64
import json
from datetime import datetime, timezone

import feedparser
import pytest
from fastapi.testclient import TestClient

from insiderrisk.api.app import app
from insiderrisk.api.deps import get_config, get_feed_builder
from insiderrisk.config import SiteConfig
from insiderrisk.content.types import FeedItem
from insiderrisk.feeds import FeedBuilder
from insiderrisk.share import OrganizationData, ShareableAssessmentData, encode

CONFIG = SiteConfig(
    site_url='https://insiderisk.io',
    environment='production',
    indexnow_enabled=False,
    indexnow_key='abc123',
)

ITEMS = [
    FeedItem(
        title='Insider Threat Costs 2025',
        slug='insider-threat-costs-2025',
        description='What insider incidents cost',
        published_at=datetime(2025, 9, 1, tzinfo=timezone.utc),
        kind='research',
    ),
    FeedItem(
        title='Phishing Resilience Playbook',
        slug='phishing-resilience',
        description='Run simulations',
        published_at=datetime(2025, 8, 1, tzinfo=timezone.utc),
        kind='playbooks',
    ),
]


def content_source(kind):
    if kind == 'all':
        return ITEMS
    return [i for i in ITEMS if i.kind == kind]


def broken_source(kind):
    raise TimeoutError("content store timed out")


@pytest.fixture
def client():
    app.dependency_overrides[get_config] = lambda: CONFIG
    app.dependency_overrides[get_feed_builder] = lambda: FeedBuilder(CONFIG, content_source)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client():
    app.dependency_overrides[get_config] = lambda: CONFIG
    app.dependency_overrides[get_feed_builder] = lambda: FeedBuilder(CONFIG, broken_source)
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestFeedEndpoints:

    @pytest.mark.parametrize('path,content_type', [
        ('/rss.xml', 'application/rss+xml'),
        ('/api/rss', 'application/rss+xml'),
        ('/research/feed.xml', 'application/rss+xml'),
        ('/playbooks/rss.xml', 'application/rss+xml'),
        ('/atom.xml', 'application/atom+xml'),
        ('/feed.json', 'application/feed+json'),
        ('/sitemap.xml', 'application/xml'),
        ('/sitemap-index.xml', 'application/xml'),
        ('/sitemaps/base.xml', 'application/xml'),
        ('/sitemaps/research.xml', 'application/xml'),
    ])
    def test_content_type_and_cache_headers(self, client, path, content_type):
        response = client.get(path)
        assert response.status_code == 200
        assert response.headers['content-type'].startswith(content_type)
        assert response.headers['cache-control'] == 'public, max-age=3600, s-maxage=3600'

    def test_rss_items(self, client):
        feed = feedparser.parse(client.get('/rss.xml').text)
        assert [e.title for e in feed.entries] == ['Insider Threat Costs 2025', 'Phishing Resilience Playbook']

    def test_json_feed(self, client):
        data = client.get('/feed.json').json()
        assert data['version'] == 'https://jsonfeed.org/version/1.1'
        assert len(data['items']) == 2

    def test_unknown_section_sitemap(self, client):
        assert client.get('/sitemaps/glossary.xml').status_code == 404

    def test_robots(self, client):
        response = client.get('/robots.txt')
        assert response.status_code == 200
        assert 'Sitemap: https://insiderisk.io/sitemap.xml' in response.text


class TestFeedFallbacks:
    """A failing content store must never surface as a 5xx."""

    @pytest.mark.parametrize('path', [
        '/rss.xml', '/research/feed.xml', '/atom.xml', '/feed.json', '/sitemap.xml', '/sitemaps/playbooks.xml',
    ])
    def test_always_200(self, broken_client, path):
        assert broken_client.get(path).status_code == 200

    def test_fallback_rss_is_valid(self, broken_client):
        feed = feedparser.parse(broken_client.get('/rss.xml').text)
        assert not feed.bozo
        assert feed.entries == []

    def test_fallback_json_feed(self, broken_client):
        data = broken_client.get('/feed.json').json()
        assert data['items'] == []
        assert data['home_page_url'] == 'https://insiderisk.io'


def sample_data():
    return ShareableAssessmentData(
        answers={'q1': 75, 'q2': 40},
        organization_data=OrganizationData('Ünïcödé Örg™', 'healthcare', '51-250'),
        completed_at='2026-10-18T09:30:00.000Z',
    )


class TestShareEndpoints:

    def test_create_share_link(self, client):
        response = client.post('/api/share', json={
            'answers': {'q1': 75, 'q2': 40},
            'organization_name': 'Acme Corp',
            'industry': 'technology',
            'employee_count': '251-1000',
        })
        assert response.status_code == 200
        body = response.json()
        assert body['url'] == f"https://insiderisk.io/results/share?data={body['token']}"

        opened = client.get('/api/share', params={'data': body['token']}).json()
        assert opened['data']['answers'] == {'q1': 75, 'q2': 40}
        assert opened['data']['organizationData']['organizationName'] == 'Acme Corp'

    def test_open_share_link(self, client):
        token = encode(sample_data())
        response = client.get(f'/api/share?data={token}&utm_source=newsletter')
        assert response.status_code == 200
        body = response.json()
        assert body['data'] == sample_data().to_dict()
        assert body['canonical_url'] == f'https://insiderisk.io/results/share?data={token}'

    def test_missing_token(self, client):
        response = client.get('/api/share')
        assert response.status_code == 400

    def test_corrupted_token(self, client):
        token = encode(sample_data())[:-6]
        response = client.get('/api/share', params={'data': token})
        assert response.status_code == 400
        assert response.json()['detail'] == 'This share link is invalid or has expired'

    def test_token_missing_fields(self, client):
        token = base64.urlsafe_b64encode(json.dumps({'answers': {}}).encode()).decode().rstrip('=')
        response = client.get('/api/share', params={'data': token})
        assert response.status_code == 400


class TestIndexNowEndpoints:

    def test_disabled(self, client):
        response = client.post('/api/indexnow', json={'urls': '/research', 'type': 'single'})
        assert response.status_code == 503

    def test_key_file(self, client):
        response = client.get('/abc123.txt')
        assert response.status_code == 200
        assert response.text == 'abc123'

    def test_wrong_key_file(self, client):
        assert client.get('/nope.txt').status_code == 404


class TestMiddleware:

    def test_trailing_slash_redirect(self, client):
        response = client.get('/rss.xml/', follow_redirects=False)
        assert response.status_code == 301
        assert response.headers['location'] == '/rss.xml'
