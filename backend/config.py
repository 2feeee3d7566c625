#!/usr/bin/env python3
"""
Configuration Management
=======================

Centralized configuration for the product extraction backend.
Values come from the environment (optionally a .env file in the project root).
"""

import os
from dataclasses import dataclass
from typing import Dict, Any
from dotenv import load_dotenv

# Load environment variables from .env file
project_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
env_path = os.path.join(project_dir, '.env')
load_dotenv(env_path)


def _as_bool(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).lower() in {'1', 'true', 'yes', 'on'}


class Config:
    """Application configuration"""

    # Server Configuration
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 8081))
    DEBUG = _as_bool(os.getenv('DEBUG', 'False'))

    # API Configuration
    BASE_URL = f"http://{HOST}:{PORT}"
    API_PREFIX = "/api"
    EXTRACT_ENDPOINT_URL = os.getenv('EXTRACT_ENDPOINT_URL', f"{BASE_URL}{API_PREFIX}/extract-product")

    # Public CORS relay, target URL gets appended url-encoded
    CORS_PROXY_URL = os.getenv('CORS_PROXY_URL', 'https://api.allorigins.win/get?url=')

    # Browser Configuration
    NAVIGATION_TIMEOUT_MS = int(os.getenv('NAVIGATION_TIMEOUT_MS', 15000))
    SETTLE_DELAY_MS = int(os.getenv('SETTLE_DELAY_MS', 2000))
    HEADLESS = _as_bool(os.getenv('HEADLESS', 'True'), default=True)
    USER_AGENT = os.getenv(
        'USER_AGENT',
        'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
        '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
    )

    # Extraction Configuration
    REQUEST_TIMEOUT = float(os.getenv('REQUEST_TIMEOUT', 30))
    SPEC_MAX_LENGTH = int(os.getenv('SPEC_MAX_LENGTH', 300))

    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        """Export configuration as dictionary"""
        return {
            'host': cls.HOST,
            'port': cls.PORT,
            'debug': cls.DEBUG,
            'base_url': cls.BASE_URL,
            'extract_endpoint_url': cls.EXTRACT_ENDPOINT_URL,
            'cors_proxy_url': cls.CORS_PROXY_URL,
            'navigation_timeout_ms': cls.NAVIGATION_TIMEOUT_MS,
            'settle_delay_ms': cls.SETTLE_DELAY_MS,
            'headless': cls.HEADLESS,
            'request_timeout': cls.REQUEST_TIMEOUT,
            'spec_max_length': cls.SPEC_MAX_LENGTH,
        }


@dataclass
class ExtractorSettings:
    """
    Settings handed to the extractor and each fetcher at construction time.

    Built from Config by default; tests construct it directly.
    """
    endpoint_url: str = Config.EXTRACT_ENDPOINT_URL
    cors_proxy_url: str = Config.CORS_PROXY_URL
    navigation_timeout_ms: int = Config.NAVIGATION_TIMEOUT_MS
    settle_delay_ms: int = Config.SETTLE_DELAY_MS
    headless: bool = Config.HEADLESS
    user_agent: str = Config.USER_AGENT
    request_timeout: float = Config.REQUEST_TIMEOUT
    spec_max_length: int = Config.SPEC_MAX_LENGTH

    @classmethod
    def from_config(cls, config=Config) -> 'ExtractorSettings':
        return cls(
            endpoint_url=config.EXTRACT_ENDPOINT_URL,
            cors_proxy_url=config.CORS_PROXY_URL,
            navigation_timeout_ms=config.NAVIGATION_TIMEOUT_MS,
            settle_delay_ms=config.SETTLE_DELAY_MS,
            headless=config.HEADLESS,
            user_agent=config.USER_AGENT,
            request_timeout=config.REQUEST_TIMEOUT,
            spec_max_length=config.SPEC_MAX_LENGTH,
        )


config = Config()
