from functools import lru_cache

from fastapi import Depends

from insiderrisk.config import SiteConfig, load_config
from insiderrisk.content.repo import list_content
from insiderrisk.feeds import FeedBuilder


@lru_cache()
def get_config() -> SiteConfig:
    return load_config()


def get_feed_builder(config: SiteConfig = Depends(get_config)) -> FeedBuilder:
    return FeedBuilder(config, list_content)
