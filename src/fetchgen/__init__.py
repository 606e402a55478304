"""fetchgen -- Cross-platform launcher for the precompiled ``fetch-gen`` binary.

The real work (reading an OpenAPI description and emitting a typed client)
happens inside a platform-specific executable shipped in the wheel under
``fetchgen/dist/<os>-<arch>/``. This package only finds that executable for
the running host and runs it, forwarding arguments, standard streams, and the
exit status untouched.

Typical usage::

    fetch-gen --input openapi.yaml --output client.ts
    python -m fetchgen --input openapi.yaml --output client.ts

Modules:
    platforms: Host OS/architecture to :class:`~fetchgen.models.PlatformKey`.
    launcher: Binary resolution, supervised spawn, and status propagation.
    locator: Self-location strategies for the two entry conventions.
    placer: Install-time copy of the matched binary to the package root.
    config: Environment-driven :class:`~fetchgen.models.LauncherSettings`.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stderr diagnostics with Rich support.
"""

__version__ = "0.1.0"
