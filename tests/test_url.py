from urllib.parse import parse_qs, urlsplit

import pytest

from buildlink.catalog import validate_packages
from buildlink.config import CodecConfig
from buildlink.encoder import ShareEncoder
from buildlink.exceptions import InvalidSelectionError
from buildlink.selection import Selection
from buildlink.summary import text_summary
from buildlink.types import CpuType, GpuType, OptimizationKey as Opt, PackageKey
from buildlink.url import assemble_link, extract_share_param

GAMER_BUILD = {
    "cpu": "intel",
    "gpu": "amd",
    "dnsProvider": "quad9",
    "peripherals": ["logitech", "razer"],
    "monitorSoftware": ["dell"],
    "optimizations": ["pagefile", "fastboot"],
    "packages": ["Steam.Steam", "Discord.Discord"],
    "preset": "gamer",
}


def test_end_to_end_link(encoder, decoder, config):
    selection = Selection.from_dict(GAMER_BUILD, config.personas)
    link = assemble_link(selection, "https://example.test", encoder)

    assert link.url == f"https://example.test/?b={link.fragment}"
    assert link.length == len(link.url)
    assert not link.too_long
    assert link.blocked_count == 0
    assert parse_qs(urlsplit(link.url).query)["b"] == [link.fragment]

    result = decoder.decode(extract_share_param(link.url))
    assert result.ok
    resolved = result.selection
    assert resolved.to_dict() == {
        "cpu": "intel",
        "gpu": "amd",
        "dns_provider": "quad9",
        "peripherals": ["logitech", "razer"],
        "monitor_software": ["dell"],
        "optimizations": ["pagefile", "fastboot"],
        "packages": ["Steam.Steam", "Discord.Discord"],
        "persona": "gamer",
        "skipped_count": 0,
        "warnings": [],
    }


def test_origin_defaults_to_config_and_trailing_slash_is_dropped(encoder):
    link = assemble_link(Selection(cpu=CpuType.AMD), encoder=encoder)
    assert link.url.startswith("https://rocktune.pedroferrari.com/?b=1.")
    assert assemble_link(Selection(), "https://a.test/", encoder).url.startswith("https://a.test/?b=")


def test_long_links_are_flagged():
    encoder = ShareEncoder(CodecConfig(url_warning_threshold=60))
    link = assemble_link(
        Selection(packages=tuple(PackageKey(f"Package.Name{i}") for i in range(50))),
        encoder=encoder,
    )
    assert link.length > 60
    assert link.too_long


def test_blocked_count_reaches_the_link(encoder):
    link = assemble_link(Selection(optimizations=(Opt.PAGEFILE, Opt.DEP_OFF)), encoder=encoder)
    assert link.blocked_count == 1


@pytest.mark.parametrize("text,expected", [
    ("https://example.test/?b=1.abc", "1.abc"),
    ("https://example.test/?x=2&b=1.abc", "1.abc"),
    ("https://example.test/#b=1.abc", "1.abc"),
    ("https://example.test/", ""),
    ("#b=1.abc", "#b=1.abc"),
    ("  1.abc ", "1.abc"),
])
def test_extract_share_param(text, expected):
    assert extract_share_param(text) == expected


def test_validate_packages_splits_valid_and_invalid():
    result = validate_packages(["Steam.Steam", "Invalid.Package", "Discord.Discord"],
                               {"Steam.Steam", "Discord.Discord"})
    assert result.valid == ("Steam.Steam", "Discord.Discord")
    assert result.invalid_count == 1


def test_validate_packages_all_invalid():
    result = validate_packages(["Invalid1", "Invalid2", "Invalid3"], {"Steam.Steam"})
    assert result.valid == ()
    assert result.invalid_count == 3


def test_selection_from_dict_rejects_bad_values(config):
    with pytest.raises(InvalidSelectionError) as exc:
        Selection.from_dict({"cpu": "pentium"}, config.personas)
    assert exc.value.field == "cpu"
    with pytest.raises(InvalidSelectionError):
        Selection.from_dict({"optimizations": "pagefile"})
    with pytest.raises(InvalidSelectionError):
        Selection.from_dict({"preset": "speedrunner"}, config.personas)
    with pytest.raises(InvalidSelectionError):
        Selection.from_dict(["cpu"])


def test_selection_from_dict_accepts_snake_case():
    selection = Selection.from_dict({"cpu": "amd", "dns_provider": "google", "monitor_software": ["hp"]})
    assert selection.cpu is CpuType.AMD
    assert selection.dns_provider.value == "google"
    assert selection.monitor_software[0].value == "hp"
    assert selection.gpu is None


def test_text_summary(config):
    selection = Selection.from_dict(GAMER_BUILD, config.personas)
    text = text_summary(selection, "https://example.test/?b=1.x", config.personas)
    lines = text.splitlines()
    assert lines[0] == "RockTune Build"
    assert "Hardware: INTEL + AMD" in lines
    assert "DNS: quad9" in lines
    assert "Peripherals: logitech, razer" in lines
    assert "Persona: Gamer" in lines
    assert "Optimizations: 2 enabled" in lines
    assert "Software: 2 packages" in lines
    assert lines[-1] == "Import: https://example.test/?b=1.x"


def test_text_summary_builds_its_own_link():
    text = text_summary(Selection(gpu=GpuType.NVIDIA))
    assert "Hardware: NVIDIA" in text
    assert text.splitlines()[-1].startswith("Import: https://rocktune.pedroferrari.com/?b=1.")


def test_payload_over_decode_limit_is_flagged():
    selection = Selection(cpu=CpuType.INTEL, packages=(PackageKey("Steam.Steam"),))
    assert not assemble_link(selection, encoder=ShareEncoder()).too_long_to_decode

    link = assemble_link(selection, encoder=ShareEncoder(CodecConfig(max_payload_length=10)))
    assert link.too_long_to_decode
