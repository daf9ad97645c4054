#!/usr/bin/env python3
"""
Tests for source parsing, the adapter manager fan-out and the merge step.
"""

import asyncio
import random

import httpx
import pytest

from locimages.adapters.manager import AdapterManager, KNOWN_SOURCES
from locimages.aggregator import (
    LocationSearch, MissingLocationError, DEFAULT_SOURCES, parse_sources, parse_coordinates
)
from locimages.models import Coordinates


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def manager(offline_client):
    return AdapterManager({'apis': {}}, http_client=offline_client)


def test_parse_sources_defaults():
    assert parse_sources(None) == list(DEFAULT_SOURCES)
    assert parse_sources("") == ["google", "bing", "flickr", "unsplash"]


def test_parse_sources_filters_unknown_and_duplicates():
    assert parse_sources(" Zillow,redfin,,myspace,zillow ") == ["zillow", "redfin"]
    assert parse_sources("myspace") == []


def test_parse_coordinates():
    assert parse_coordinates("48.85", "2.35") == Coordinates(lat=48.85, lng=2.35)
    assert parse_coordinates("0", "0") == Coordinates(lat=0.0, lng=0.0)
    assert parse_coordinates("48.85", None) is None
    assert parse_coordinates("abc", "2.35") is None
    assert parse_coordinates("nan", "2.35") is None


def test_manager_builds_every_source(manager):
    assert tuple(manager.adapters) == KNOWN_SOURCES
    assert [s['id'] for s in manager.describe_sources()] == list(KNOWN_SOURCES)
    assert all(not s['live'] for s in manager.describe_sources())


def test_manager_marks_configured_sources_live(offline_client):
    manager = AdapterManager({'apis': {'bing': {'api_key': 'k'}}}, http_client=offline_client)
    live = {s['id']: s['live'] for s in manager.describe_sources()}

    assert live['bing'] is True
    assert live['google'] is False


def test_search_sources_pairs_results_with_tags(manager):
    paired = run(manager.search_sources("Paris", ["redfin", "unsplash", "nope"]))

    assert [source for source, _ in paired] == ["redfin", "unsplash"]
    assert len(paired[0][1]) == 6
    assert len(paired[1][1]) == 10


def test_one_failing_adapter_does_not_abort_others(manager):
    async def explode(query, coordinates=None):
        raise RuntimeError("provider exploded")

    manager.adapters['zillow'].search = explode
    paired = dict(run(manager.search_sources("Paris", ["zillow", "redfin"])))

    assert paired['zillow'] == []
    assert len(paired['redfin']) == 6


def test_adapters_run_concurrently(manager):
    state = {'running': 0, 'peak': 0}

    def slow(source):
        async def search(query, coordinates=None):
            state['running'] += 1
            state['peak'] = max(state['peak'], state['running'])
            await asyncio.sleep(0.01)
            state['running'] -= 1
            return []
        return search

    for source in ('zillow', 'redfin', 'unsplash'):
        manager.adapters[source].search = slow(source)

    run(manager.search_sources("Paris", ['zillow', 'redfin', 'unsplash']))

    assert state['peak'] == 3


def test_only_flickr_receives_coordinates(manager):
    seen = {}

    def capture(source):
        async def search(query, coordinates=None):
            seen[source] = coordinates
            return []
        return search

    manager.adapters['flickr'].search = capture('flickr')
    manager.adapters['bing'].search = capture('bing')
    point = Coordinates(lat=1.5, lng=2.5)

    run(manager.search_sources("Paris", ['flickr', 'bing'], point))

    assert seen == {'flickr': point, 'bing': None}


def test_search_requires_location(manager):
    with pytest.raises(MissingLocationError):
        run(LocationSearch(manager).search(""))
    with pytest.raises(MissingLocationError):
        run(LocationSearch(manager).search("   "))


def test_real_estate_only_search(manager):
    response = run(LocationSearch(manager).search("Austin", ["zillow", "redfin"]))

    assert response.count == len(response.images) == 12
    assert {img.source for img in response.images} <= {"zillow", "redfin"}
    assert response.sources == ["zillow", "redfin"]


def test_default_search_has_unique_ids(manager, offline_transport):
    response = run(LocationSearch(manager).search("Paris"))

    ids = [img.id for img in response.images]
    assert len(ids) == len(set(ids)) == 10 + 8 + 8 + 10
    assert response.sources == ["google", "bing", "flickr", "unsplash"]
    assert offline_transport.requests == []


def test_contributing_sources_skip_empty_results(manager):
    async def nothing(query, coordinates=None):
        return []

    manager.adapters['google'].search = nothing
    response = run(LocationSearch(manager).search("Paris", ["google", "unsplash"]))

    assert response.sources == ["unsplash"]
    assert response.count == 10


def test_shuffle_is_seedable_and_keeps_every_image(manager):
    first = run(LocationSearch(manager, rng=random.Random(7)).search("Paris", ["zillow", "redfin"]))
    second = run(LocationSearch(manager, rng=random.Random(7)).search("Paris", ["zillow", "redfin"]))
    unshuffled = [img.id for _, results in run(manager.search_sources("Paris", ["zillow", "redfin"])) for img in results]

    assert [img.id for img in first.images] == [img.id for img in second.images]
    assert sorted(img.id for img in first.images) == sorted(unshuffled)


def test_duplicate_provider_ids_are_dropped(stub_client):
    def handler(request):
        return httpx.Response(200, json={"value": [
            {"imageId": "X", "contentUrl": "https://b/1.jpg", "name": "first"},
            {"imageId": "X", "contentUrl": "https://b/2.jpg", "name": "second"},
            {"imageId": "Y", "contentUrl": "https://b/3.jpg", "name": "third"},
        ]})

    client, _ = stub_client(handler)
    manager = AdapterManager({'apis': {'bing': {'api_key': 'k'}}}, http_client=client)
    response = run(LocationSearch(manager).search("Paris", ["bing"]))

    ids = [img.id for img in response.images]
    assert sorted(ids) == ["bing-X", "bing-Y"]
    assert response.count == 2
    assert {img.title for img in response.images} == {"first", "third"}
