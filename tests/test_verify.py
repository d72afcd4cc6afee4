"""Tests for cross-layer ide/linter verification."""

import pytest
from qodana_config import Identity
from qodana_config import IdentityMismatchError
from qodana_config import LayeredConfig
from qodana_config import verify_identity_matches_local


class TestVerifyIdentity:
    """Test verify_identity_matches_local."""

    @pytest.fixture
    def make_config(self, scratch_root):
        """Build a LayeredConfig with an optional local echo file."""

        def _make(effective: Identity, local_yaml: str | None = None) -> LayeredConfig:
            effective_path = scratch_root / "effective.qodana.yaml"
            effective_path.write_text(f"ide: '{effective.ide}'\nlinter: '{effective.linter}'\n")
            state_path = scratch_root / "qodana-config.json"
            state_path.write_text("{}")
            local_path = None
            if local_yaml is not None:
                local_path = scratch_root / "qodana.yaml"
                local_path.write_text(local_yaml)
            return LayeredConfig(
                config_dir=scratch_root,
                effective_path=effective_path,
                local_echo_path=local_path,
                resolver_state_path=state_path,
                effective_identity=effective,
            )

        return _make

    def test_unconstrained_effective_passes(self, make_config):
        """Test empty effective ide and linter pass whatever the local file says."""
        config = make_config(Identity(), local_yaml="ide: QDJVM\nlinter: qodana-jvm\n")
        verify_identity_matches_local(config, "qodana.yaml")

    def test_no_local_layer_passes(self, make_config):
        """Test nothing is compared when the resolver echoed no local file."""
        config = make_config(Identity(ide="QDJVM", linter="qodana-jvm"))
        verify_identity_matches_local(config, "qodana.yaml")

    def test_matching_identity_passes(self, make_config):
        """Test identical declarations pass."""
        config = make_config(Identity(ide="QDJVM"), local_yaml="ide: QDJVM\n")
        verify_identity_matches_local(config, "qodana.yaml")

    def test_ide_mismatch(self, make_config, capsys):
        """Test a differing ide fails with a remediation message."""
        config = make_config(Identity(ide="QDPY"), local_yaml="ide: QDJVM\n")

        with pytest.raises(IdentityMismatchError) as exc_info:
            verify_identity_matches_local(config, "sub/qodana.yaml")

        assert exc_info.value.field == "ide"
        assert exc_info.value.effective == "QDPY"
        assert exc_info.value.local == "QDJVM"
        err = capsys.readouterr().err
        assert "'ide: QDPY'" in err
        assert "Add `ide: QDPY` to sub/qodana.yaml" in err

    def test_linter_mismatch(self, make_config, capsys):
        """Test a differing linter fails when the ide matches."""
        config = make_config(Identity(linter="jetbrains/qodana-jvm"), local_yaml="linter: jetbrains/qodana-js\n")

        with pytest.raises(IdentityMismatchError) as exc_info:
            verify_identity_matches_local(config, "qodana.yaml")

        assert exc_info.value.field == "linter"
        assert "Add `linter: jetbrains/qodana-jvm` to qodana.yaml" in capsys.readouterr().err

    def test_ide_reported_before_linter(self, make_config):
        """Test the ide mismatch is reported first when both differ."""
        config = make_config(Identity(ide="QDPY", linter="a"), local_yaml="ide: QDJVM\nlinter: b\n")
        with pytest.raises(IdentityMismatchError) as exc_info:
            verify_identity_matches_local(config, "qodana.yaml")
        assert exc_info.value.field == "ide"

    def test_empty_local_never_matches(self, make_config):
        """Test an undeclared local ide does not satisfy a declared effective ide."""
        config = make_config(Identity(ide="QDJVM"), local_yaml="version: '1.0'\n")
        with pytest.raises(IdentityMismatchError):
            verify_identity_matches_local(config, "qodana.yaml")

    def test_comparison_is_case_sensitive(self, make_config):
        """Test values are compared without case folding."""
        config = make_config(Identity(ide="QDJVM"), local_yaml="ide: qdjvm\n")
        with pytest.raises(IdentityMismatchError):
            verify_identity_matches_local(config, "qodana.yaml")
