"""Application keys for type-safe app configuration access."""

from aiohttp import web

from govanity.core.registration import PackageRegistration

packages_key = web.AppKey("packages", list[PackageRegistration])
verbose_key = web.AppKey("verbose", bool)
