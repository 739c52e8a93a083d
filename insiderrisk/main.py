import os
import sys
import argparse
import logging

logging.basicConfig(
    level=os.environ.get('LOG_LEVEL', 'INFO'),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Insider Risk Index web service')
    parser.add_argument('--mode', choices=['api', 'indexnow', 'sitemaps'], default='api',
                        help='Run mode: api (start server), indexnow (submit core pages, sitemaps and feeds), sitemaps (submit sitemaps and feeds only)')

    args = parser.parse_args(argv)

    if args.mode == 'api':
        import uvicorn
        from insiderrisk.api.app import app
        port = int(os.environ.get('PORT', 5000))
        logger.info(f"Starting API server on port {port}...")
        uvicorn.run(app, host="0.0.0.0", port=port)
        return 0

    from insiderrisk.config import load_config
    from insiderrisk.seo.indexnow import submit_core_pages, submit_sitemaps

    config = load_config()
    if not config.indexnow_enabled:
        logger.warning("IndexNow is disabled (INDEXNOW_ENABLED=false)")
        return 1

    if args.mode == 'indexnow':
        ok = submit_core_pages(config) and submit_sitemaps(config)
    else:
        ok = submit_sitemaps(config)

    if not ok:
        logger.error("IndexNow submission failed")
        return 1
    logger.info("IndexNow submission complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
