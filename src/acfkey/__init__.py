"""acfkey -- inject an ACF PRO license key into the vendor download URL.

The package resolves the license key from an ordered chain of sources
(environment variable first, then a ``.env`` file in the working directory)
and hands the host tool a *new* fetch configuration that targets the
key-augmented download URL. The host's own configuration is never mutated.

Typical use from a host that raises pre-download notifications::

    from acfkey.hooks import EventDispatcher, PRE_DOWNLOAD, register_injector

    dispatcher = EventDispatcher()
    register_injector(dispatcher)
    dispatcher.dispatch(PRE_DOWNLOAD, event)

Modules:
    providers: Key providers, the provider chain, and the provider registry.
    matcher: Allow-list matching of the vendor download endpoint.
    augmenter: Builds the replacement fetch configuration.
    handler: The pre-download handler tying matcher, chain and augmenter.
    hooks: Event dispatcher and the pre-download event type.
    config: Project-local configuration and precedence resolution.
    app: Typer CLI entry point.
"""

__version__ = "0.3.0"
