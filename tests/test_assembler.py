"""Configuration assembler stories: roles, rule groups, nesting and flattening."""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from shrinkconf.domain.assembler import Configuration, ConfigurationAssembler
from shrinkconf.domain.classpath import ClassPathEntry
from shrinkconf.domain.enums import ClassPathRole, RuleCategory
from shrinkconf.domain.errors import ConfigurationError, UnresolvedReferenceError
from shrinkconf.domain.filters import FilterSpec
from shrinkconf.domain.references import Reference


def _entry(*paths: str) -> ClassPathEntry:
    entry = ClassPathEntry()
    for path in paths:
        entry.add_location(path)
    return entry


# ======================== Roles ========================


@pytest.mark.os_agnostic
def test_program_and_library_entries_stay_apart(tmp_path: Path) -> None:
    """Library archives never leak into the program classpath or the other way round."""
    assembler = ConfigurationAssembler()
    assembler.add_injar(_entry("in.jar"))
    assembler.add_libraryjar(_entry("rt.jar"))
    assembler.add_outjar(_entry("out.jar"))

    config = assembler.flatten(tmp_path)

    assert [item.path for item in config.program_jars] == [str(tmp_path / "in.jar"), str(tmp_path / "out.jar")]
    assert [item.path for item in config.library_jars] == [str(tmp_path / "rt.jar")]
    assert [item.output for item in config.program_jars] == [False, True]
    assert config.classpath(ClassPathRole.LIBRARY) == config.library_jars


@pytest.mark.os_agnostic
def test_entries_of_one_role_keep_declaration_order(tmp_path: Path) -> None:
    """Several entries of the same role concatenate in the order declared."""
    assembler = ConfigurationAssembler()
    assembler.add_libraryjar(_entry("b.jar", "c.jar"))
    assembler.add_libraryjar(_entry("a.jar"))

    config = assembler.flatten(tmp_path)

    assert [Path(item.path).name for item in config.library_jars] == ["b.jar", "c.jar", "a.jar"]


@pytest.mark.os_agnostic
def test_classpath_filters_survive_flattening(tmp_path: Path) -> None:
    """Per-location filters arrive in the flattened item."""
    entry = _entry("in.jar")
    entry.add_filter(FilterSpec("**.class"))
    entry.add_filter(FilterSpec("META-INF/**"), is_inclusion=False)
    assembler = ConfigurationAssembler()
    assembler.add_injar(entry)

    (item,) = assembler.flatten(tmp_path).program_jars

    assert item.filter_chain() == ("**.class", "!META-INF/**")


@pytest.mark.os_agnostic
def test_unset_location_is_dropped_at_flatten_time_not_before(tmp_path: Path) -> None:
    """Declaring an unset location succeeds; flattening leaves it and its filters out."""
    entry = ClassPathEntry()
    entry.add_location(None)
    entry.add_filter(FilterSpec("**.class"))
    entry.add_location("")
    entry.add_location("in.jar")
    assembler = ConfigurationAssembler()
    assembler.add_injar(entry)

    (item,) = assembler.flatten(tmp_path).program_jars

    assert item.path == str(tmp_path / "in.jar")
    assert not item.is_filtered


# ======================== Rule groups ========================


@pytest.mark.os_agnostic
def test_rule_group_marks_exclusions_in_declaration_order() -> None:
    """Inclusions and exclusions interleave as declared, exclusions marked."""
    assembler = ConfigurationAssembler()
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("com.example.**"))
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("com.example.api.**"), is_inclusion=False)
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("org.slf4j.**"))

    config = assembler.flatten()

    assert config.rule(RuleCategory.DONT_WARN) == ("com.example.**", "!com.example.api.**", "org.slf4j.**")


@pytest.mark.os_agnostic
def test_custom_exclusion_marker_is_applied() -> None:
    """The marker passed to flatten prefixes exclusion entries."""
    assembler = ConfigurationAssembler()
    assembler.add_filter(RuleCategory.KEEP_ATTRIBUTES, FilterSpec("Signature"), is_inclusion=False)

    config = assembler.flatten(exclusion_marker="~")

    assert config.rule(RuleCategory.KEEP_ATTRIBUTES) == ("~Signature",)


@pytest.mark.os_agnostic
def test_rule_groups_do_not_share_entries() -> None:
    """Each category has its own chain."""
    assembler = ConfigurationAssembler()
    assembler.add_filter(RuleCategory.DONT_NOTE, FilterSpec("a.**"))
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("b.**"))

    config = assembler.flatten()

    assert config.rule(RuleCategory.DONT_NOTE) == ("a.**",)
    assert config.rule(RuleCategory.DONT_WARN) == ("b.**",)


@pytest.mark.os_agnostic
def test_declared_category_with_only_unset_filters_is_present_and_empty() -> None:
    """A bare option still counts as declared; its chain matches everything."""
    assembler = ConfigurationAssembler()
    assembler.add_filter(RuleCategory.KEEP_DIRECTORIES, FilterSpec())

    config = assembler.flatten()

    assert config.rule(RuleCategory.KEEP_DIRECTORIES) == ()
    assert RuleCategory.KEEP_DIRECTORIES in config.rules


@pytest.mark.os_agnostic
def test_undeclared_category_is_absent() -> None:
    """Categories nobody declared are not in the result."""
    assert ConfigurationAssembler().flatten().rule(RuleCategory.OPTIMIZATIONS) is None


@pytest.mark.os_agnostic
def test_empty_assembler_flattens_to_empty_configuration() -> None:
    """Nothing declared means nothing flattened, and no error."""
    assembler = ConfigurationAssembler()

    assert assembler.is_empty
    assert assembler.flatten() == Configuration()


# ======================== Flatten purity ========================


@pytest.mark.os_agnostic
def test_flatten_twice_yields_equal_results(tmp_path: Path) -> None:
    """Flattening reads state only, so repeating it changes nothing."""
    assembler = ConfigurationAssembler()
    assembler.add_injar(_entry("in.jar"))
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("a.**"), is_inclusion=False)

    first = assembler.flatten(tmp_path)
    second = assembler.flatten(tmp_path)

    assert first == second
    assert len(assembler.declarations) == 2


@pytest.mark.os_agnostic
def test_flatten_picks_up_declarations_made_afterwards(tmp_path: Path) -> None:
    """Entries are read at flatten time, so later additions are seen."""
    entry = _entry("a.jar")
    assembler = ConfigurationAssembler()
    assembler.add_injar(entry)
    assembler.flatten(tmp_path)

    entry.add_location("b.jar")

    assert len(assembler.flatten(tmp_path).program_jars) == 2


@pytest.mark.os_agnostic
@given(
    rules=st.lists(
        st.tuples(
            st.sampled_from(list(RuleCategory)),
            st.one_of(st.none(), st.text(min_size=1, max_size=10)),
            st.booleans(),
        ),
        max_size=20,
    )
)
def test_flatten_is_repeatable_for_any_rule_declarations(
    rules: list[tuple[RuleCategory, str | None, bool]],
) -> None:
    """Any mix of rule declarations flattens to the same result every time."""
    assembler = ConfigurationAssembler()
    for category, name, inclusion in rules:
        assembler.add_filter(category, FilterSpec(name), is_inclusion=inclusion)

    assert assembler.flatten() == assembler.flatten()
    assert set(assembler.flatten().rules) == {category for category, _, _ in rules}


# ======================== References ========================


@pytest.mark.os_agnostic
def test_classpath_reference_shares_the_referenced_state(tmp_path: Path) -> None:
    """A reference sees locations added to the referenced entry later on."""
    shared = _entry("rt.jar")
    assembler = ConfigurationAssembler()
    assembler.references.register("runtime", shared)
    assembler.add_libraryjar(Reference("runtime"))
    shared.add_location("extra.jar")

    config = assembler.flatten(tmp_path)

    assert [Path(item.path).name for item in config.library_jars] == ["rt.jar", "extra.jar"]


@pytest.mark.os_agnostic
def test_filter_reference_contributes_referenced_name() -> None:
    """A filter given by reference acts like the filter it names."""
    assembler = ConfigurationAssembler()
    assembler.references.register("logging", FilterSpec("org.slf4j.**"))
    assembler.add_filter(RuleCategory.DONT_WARN, Reference("logging"))

    assert assembler.flatten().rule(RuleCategory.DONT_WARN) == ("org.slf4j.**",)


@pytest.mark.os_agnostic
def test_unknown_reference_fails_flattening() -> None:
    """A dangling reference is reported when flattening."""
    assembler = ConfigurationAssembler()
    assembler.add_injar(Reference("nowhere"))

    with pytest.raises(UnresolvedReferenceError):
        assembler.flatten()


# ======================== Nested configurations ========================


@pytest.mark.os_agnostic
def test_nested_configuration_expands_at_its_position(tmp_path: Path) -> None:
    """Declarations of a nested assembler slot in where it was added."""
    common = ConfigurationAssembler()
    common.add_libraryjar(_entry("rt.jar"))
    common.add_filter(RuleCategory.DONT_WARN, FilterSpec("b.**"))

    assembler = ConfigurationAssembler()
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("a.**"))
    assembler.add_configuration(common)
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("c.**"))

    config = assembler.flatten(tmp_path)

    assert config.rule(RuleCategory.DONT_WARN) == ("a.**", "b.**", "c.**")
    assert [Path(item.path).name for item in config.library_jars] == ["rt.jar"]


@pytest.mark.os_agnostic
def test_nested_configuration_by_reference(tmp_path: Path) -> None:
    """A nested configuration can be named by reference."""
    common = ConfigurationAssembler()
    common.add_filter(RuleCategory.DONT_NOTE, FilterSpec("x.**"))
    assembler = ConfigurationAssembler()
    assembler.references.register("common", common)
    assembler.add_configuration(Reference("common"))

    assert assembler.flatten(tmp_path).rule(RuleCategory.DONT_NOTE) == ("x.**",)


@pytest.mark.os_agnostic
def test_configuration_including_itself_is_rejected() -> None:
    """Mutually nested configurations are reported rather than looping."""
    first = ConfigurationAssembler()
    second = ConfigurationAssembler()
    first.add_configuration(second)
    second.add_configuration(first)

    with pytest.raises(UnresolvedReferenceError, match="includes itself"):
        first.flatten()


@pytest.mark.os_agnostic
def test_same_nested_configuration_may_appear_twice() -> None:
    """Including one configuration twice side by side is not a cycle."""
    common = ConfigurationAssembler()
    common.add_filter(RuleCategory.DONT_NOTE, FilterSpec("x.**"))
    assembler = ConfigurationAssembler()
    assembler.add_configuration(common)
    assembler.add_configuration(common)

    assert assembler.flatten().rule(RuleCategory.DONT_NOTE) == ("x.**", "x.**")


# ======================== append_to ========================


@pytest.mark.os_agnostic
def test_append_to_copies_declarations_after_target_own(tmp_path: Path) -> None:
    """The target keeps its own declarations and receives ours after them."""
    source = ConfigurationAssembler()
    source.add_injar(_entry("in.jar"))
    source.add_filter(RuleCategory.DONT_WARN, FilterSpec("b.**"), is_inclusion=False)
    target = ConfigurationAssembler()
    target.add_filter(RuleCategory.DONT_WARN, FilterSpec("a.**"))

    source.append_to(target)
    config = target.flatten(tmp_path)

    assert config.rule(RuleCategory.DONT_WARN) == ("a.**", "!b.**")
    assert [Path(item.path).name for item in config.program_jars] == ["in.jar"]


@pytest.mark.os_agnostic
def test_append_to_dereferences_against_source_table(tmp_path: Path) -> None:
    """References are resolved in the source, so the target needs no ids."""
    source = ConfigurationAssembler()
    source.references.register("rt", _entry("rt.jar"))
    source.add_libraryjar(Reference("rt"))
    target = ConfigurationAssembler()

    source.append_to(target)

    assert len(target.references) == 0
    assert [Path(item.path).name for item in target.flatten(tmp_path).library_jars] == ["rt.jar"]


@pytest.mark.os_agnostic
def test_append_to_snapshots_classpath_entries(tmp_path: Path) -> None:
    """Locations added to the source entry afterwards do not reach the target."""
    entry = _entry("a.jar")
    source = ConfigurationAssembler()
    source.add_injar(entry)
    target = ConfigurationAssembler()

    source.append_to(target)
    entry.add_location("b.jar")

    assert len(target.flatten(tmp_path).program_jars) == 1


# ======================== Option text ========================


@pytest.mark.os_agnostic
def test_add_text_records_declarations_in_order(tmp_path: Path) -> None:
    """Option text mixes with element declarations in the order both were made."""
    assembler = ConfigurationAssembler()
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("first.**"))
    assembler.add_text("-dontwarn second.**\n-libraryjars rt.jar\n")
    assembler.add_filter(RuleCategory.DONT_WARN, FilterSpec("third.**"))

    config = assembler.flatten(tmp_path)

    assert config.rule(RuleCategory.DONT_WARN) == ("first.**", "second.**", "third.**")
    assert [item.path for item in config.library_jars] == [str(tmp_path / "rt.jar")]


@pytest.mark.os_agnostic
def test_add_text_rejects_bad_syntax_without_recording_anything() -> None:
    """A malformed text raises and leaves the assembler as it was."""
    assembler = ConfigurationAssembler()

    with pytest.raises(ConfigurationError, match="line 2"):
        assembler.add_text("-dontwarn a.**\n-keepeverything\n")

    assert assembler.is_empty


@pytest.mark.os_agnostic
def test_keep_variants_and_assumptions_form_their_own_groups() -> None:
    """Each keep variant and each assumption option collects its own class names."""
    assembler = ConfigurationAssembler()
    assembler.add_text(
        "-keep class com.example.Main\n"
        "-keepnames class com.example.Api\n"
        "-keepclassmembers class com.example.Model\n"
        "-whyareyoukeeping class com.example.Util\n"
        "-assumenosideeffects class android.util.Log\n"
        "-assumevalues class android.os.Build\n"
    )

    rules = assembler.flatten().rules

    assert rules == {
        RuleCategory.KEEP: ("com.example.Main",),
        RuleCategory.KEEP_NAMES: ("com.example.Api",),
        RuleCategory.KEEP_CLASS_MEMBERS: ("com.example.Model",),
        RuleCategory.WHY_ARE_YOU_KEEPING: ("com.example.Util",),
        RuleCategory.ASSUME_NO_SIDE_EFFECTS: ("android.util.Log",),
        RuleCategory.ASSUME_VALUES: ("android.os.Build",),
    }
