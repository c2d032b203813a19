"""Tests for request path resolution."""

import pytest
from govanity.core.registration import PackageRegistration, Submodule
from govanity.core.resolver import Resolution, covers, resolve


class TestCovers:
    """Tests for covers()."""

    @pytest.mark.parametrize("path", ["/pkg/sub", "/pkg/sub/", "/pkg/sub/foo/bar"])
    def test__path_at_or_below_prefix__matches(self, path: str) -> None:
        """Match the prefix, the prefix with a slash and anything beneath."""
        assert covers("/pkg/sub", path)

    @pytest.mark.parametrize("path", ["/pkg/subway", "/pkg/su", "/pkg", "/other"])
    def test__sibling_or_parent_path__does_not_match(self, path: str) -> None:
        """Do not match paths sharing only a string prefix."""
        assert not covers("/pkg/sub", path)


class TestResolve:
    """Tests for resolve()."""

    @pytest.mark.parametrize("path", ["/pkg", "/pkg/"])
    def test__mount_path_without_submodules__returns_baseline(self, path: str) -> None:
        """Return the package path and URL unchanged."""
        registration = PackageRegistration(path="/pkg", url="https://host/a")

        assert resolve(registration, path) == Resolution("/pkg", "https://host/a")

    def test__path_below_submodule__returns_submodule(
        self, registration: PackageRegistration
    ) -> None:
        """Resolve nested paths to the covering submodule."""
        result = resolve(registration, "/pkg/sub/foo")

        assert result == ("/pkg/sub", "https://host/b")

    def test__path_outside_submodules__returns_baseline(
        self, registration: PackageRegistration
    ) -> None:
        """Fall back to the package when no submodule matches."""
        result = resolve(registration, "/pkg/other")

        assert result == ("/pkg", "https://host/a")

    def test__submodule_name_prefix__does_not_match(
        self, registration: PackageRegistration
    ) -> None:
        """Require a path separator after the submodule path."""
        result = resolve(registration, "/pkg/subway")

        assert result.path == "/pkg"

    @pytest.mark.parametrize("path", ["", "/", "/unrelated/path", "not a path"])
    def test__unrelated_path__returns_baseline(
        self, registration: PackageRegistration, path: str
    ) -> None:
        """Degrade to the baseline for paths the package does not own."""
        assert resolve(registration, path) == ("/pkg", "https://host/a")

    def test__nested_submodules__longest_match_wins(self) -> None:
        """Select the most specific submodule regardless of order."""
        short = Submodule(path="/a", url="https://host/short")
        long = Submodule(path="/a/b", url="https://host/long")

        for submodules in [(short, long), (long, short)]:
            registration = PackageRegistration(
                path="/pkg", url="https://host/root", submodules=submodules
            )

            result = resolve(registration, "/pkg/a/b/c")

            assert result == ("/pkg/a/b", "https://host/long")

    def test__nested_submodules__shorter_match_for_shallow_path(self) -> None:
        """Use the shorter submodule when the longer one does not cover."""
        registration = PackageRegistration(
            path="/pkg",
            url="https://host/root",
            submodules=(
                Submodule(path="/a/b", url="https://host/long"),
                Submodule(path="/a", url="https://host/short"),
            ),
        )

        result = resolve(registration, "/pkg/a/c")

        assert result == ("/pkg/a", "https://host/short")

    def test__submodule_without_url__inherits_package_url(self) -> None:
        """Advertise the package URL for submodules without their own."""
        registration = PackageRegistration(
            path="/pkg",
            url="https://host/a",
            submodules=(Submodule(path="/sub"),),
        )

        result = resolve(registration, "/pkg/sub")

        assert result == ("/pkg/sub", "https://host/a")

    def test__longest_submodule_without_url__inherits_package_url(self) -> None:
        """Inherit from the package, not from a shorter matching submodule."""
        submodules = (
            Submodule(path="/a", url="https://host/short"),
            Submodule(path="/a/b"),
        )
        for ordered in [submodules, submodules[::-1]]:
            registration = PackageRegistration(
                path="/pkg", url="https://host/root", submodules=ordered
            )

            result = resolve(registration, "/pkg/a/b")

            assert result == ("/pkg/a/b", "https://host/root")

    def test__registration__is_not_modified(
        self, registration: PackageRegistration
    ) -> None:
        """Leave the registration untouched."""
        before = registration.to_dict()

        resolve(registration, "/pkg/sub/foo")

        assert registration.to_dict() == before
