import pytest

from device_detector import OperatingSystem
from device_detector.cache import get_shared_cache
from device_detector.config import CacheConfig, Config, PlatformConfig, RulesConfig
from device_detector.models import OSInfo
from device_detector.os_detection import build_os_registry
from device_detector.parser import Parser

UBUNTU_FIREFOX = "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/115.0"
ANDROID_CHROME = ("Mozilla/5.0 (Linux; Android 13; Pixel 7) AppleWebKit/537.36 "
                  "(KHTML, like Gecko) Chrome/116.0.0.0 Mobile Safari/537.36")
MAC_CHROME = ("Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
              "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36")
WINDOWS_CHROME = ("Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
                  "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36")
IPHONE_SAFARI = ("Mozilla/5.0 (iPhone; CPU iPhone OS 16_6 like Mac OS X) AppleWebKit/605.1.15 "
                 "(KHTML, like Gecko) Version/16.6 Mobile/15E148 Safari/604.1")
CHROMEBOOK = ("Mozilla/5.0 (X11; CrOS x86_64 14541.0.0) AppleWebKit/537.36 "
              "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36")
FEDORA = "Mozilla/5.0 (X11; Fedora; Linux x86_64; rv:109.0) Gecko/20100101 Firefox/118.0"
UNKNOWN = "curl/8.0.1"


def _os(user_agent, matcher, cache, **kwargs):
    return OperatingSystem(user_agent, matcher=matcher, cache=cache, **kwargs)


def test_ubuntu_is_desktop(os_matcher, cache):
    os = _os(UBUNTU_FIREFOX, os_matcher, cache)
    assert os.name() == "Ubuntu"
    assert os.short_name() == "UBT"
    assert os.family() == "GNU/Linux"
    assert os.is_desktop() is True
    assert os.full_version() is None


def test_android_is_not_desktop(os_matcher, cache):
    os = _os(ANDROID_CHROME, os_matcher, cache)
    assert os.name() == "Android"
    assert os.short_name() == "AND"
    assert os.family() == "Android"
    assert os.is_desktop() is False
    assert os.full_version() == "13"


@pytest.mark.parametrize(
    "user_agent,name,short,family,version",
    [
        (MAC_CHROME, "Mac", "MAC", "Mac", "10.15.7"),
        (WINDOWS_CHROME, "Windows", "WIN", "Windows", "10"),
        (IPHONE_SAFARI, "iOS", "IOS", "iOS", "16.6"),
        (CHROMEBOOK, "Chrome OS", "COS", "Chrome OS", "14541.0.0"),
        (FEDORA, "Fedora", "FED", "GNU/Linux", None),
    ],
)
def test_known_platforms(os_matcher, cache, user_agent, name, short, family, version):
    os = _os(user_agent, os_matcher, cache)
    assert os.os_info() == OSInfo(name=name, short_code=short, family=family)
    assert os.full_version() == version


@pytest.mark.parametrize("user_agent", [UNKNOWN, "", None])
def test_unknown_platform(os_matcher, cache, user_agent):
    os = _os(user_agent, os_matcher, cache)
    assert os.short_name() == "UNK"
    assert os.name() is None
    assert os.family() is None
    assert os.is_desktop() is False
    assert os.full_version() is None


def test_classification_is_memoized(counting_matcher, cache):
    first = _os(UBUNTU_FIREFOX, counting_matcher, cache)
    info = first.os_info()
    first.name()
    first.family()
    first.full_version()
    assert counting_matcher.calls == 1

    second = _os(UBUNTU_FIREFOX, counting_matcher, cache)
    assert second.os_info() is info
    assert second.full_version() is None
    assert counting_matcher.calls == 1


def test_distinct_user_agents_do_not_share_results(counting_matcher, cache):
    ubuntu = _os(UBUNTU_FIREFOX, counting_matcher, cache).os_info()
    android = _os(ANDROID_CHROME, counting_matcher, cache).os_info()
    assert ubuntu.short_code == "UBT"
    assert android.short_code == "AND"
    assert counting_matcher.calls == 2


def test_extracted_name_outside_registry_keeps_spelling(tmp_path, cache):
    rules = tmp_path / "custom.yml"
    rules.write_text("- regex: 'SerenityOS'\n  name: 'SerenityOS'\n", encoding="utf-8")
    config = Config(rules=RulesConfig(os_files=[str(rules)]))
    os = OperatingSystem("Mozilla/5.0 (SerenityOS; x86_64)", cache=cache, config=config)
    assert os.name() == "SerenityOS"
    assert os.short_name() == "UNK"
    assert os.family() is None


def test_configured_desktop_families(os_matcher, cache):
    config = Config(platform=PlatformConfig(desktop_families=["Android"]))
    os = _os(ANDROID_CHROME, os_matcher, cache, config=config)
    assert os.is_desktop() is True


def test_explicit_registry(os_matcher, cache):
    registry = build_os_registry(desktop_families=[])
    assert _os(UBUNTU_FIREFOX, os_matcher, cache, registry=registry).is_desktop() is False


def test_default_matcher_uses_bundled_rules(cache):
    os = OperatingSystem(WINDOWS_CHROME, cache=cache)
    assert os.short_name() == "WIN"
    # compiled rule set is shared through the cache
    assert OperatingSystem(MAC_CHROME, cache=cache).matcher is os.matcher


def test_to_dict(os_matcher, cache):
    assert _os(ANDROID_CHROME, os_matcher, cache).os_info().to_dict() == {
        "name": "Android",
        "short_name": "AND",
        "family": "Android",
    }


def _ubuntu_as_debian_rules(tmp_path):
    rules = tmp_path / "debian.yml"
    rules.write_text("- regex: 'Ubuntu'\n  name: 'Debian'\n", encoding="utf-8")
    return Config(rules=RulesConfig(os_files=[str(rules)]))


def test_rule_sets_sharing_a_cache_do_not_collide(tmp_path, cache):
    default = OperatingSystem(UBUNTU_FIREFOX, cache=cache)
    assert default.short_name() == "UBT"

    custom = OperatingSystem(UBUNTU_FIREFOX, cache=cache, config=_ubuntu_as_debian_rules(tmp_path))
    assert custom.short_name() == "DEB"
    assert custom.name() == "Debian"
    assert default.short_name() == "UBT"


def test_registries_sharing_a_cache_do_not_collide(os_matcher, cache):
    registry = build_os_registry({"UBT": "Ubuntu"}, {"Custom Linux": ["UBT"]})
    assert _os(UBUNTU_FIREFOX, os_matcher, cache).family() == "GNU/Linux"
    assert _os(UBUNTU_FIREFOX, os_matcher, cache, registry=registry).family() == "Custom Linux"


def test_default_construction_keeps_results_per_instance():
    OperatingSystem(UNKNOWN).short_name()
    shared_before = len(get_shared_cache())
    for i in range(200):
        os = OperatingSystem(f"agent-{i}")
        assert os.short_name() == "UNK"
        assert len(os.cache) == 2
    assert len(get_shared_cache()) == shared_before


def test_disabled_cache_still_compiles_rules_once(tmp_path, monkeypatch):
    from device_detector.rules import matcher as matcher_module

    loads = []
    real_load_rules = matcher_module.load_rules

    def counting_load_rules(file_paths):
        loads.append(tuple(file_paths))
        return real_load_rules(file_paths)

    monkeypatch.setattr(matcher_module, "load_rules", counting_load_rules)

    config = _ubuntu_as_debian_rules(tmp_path)
    config.cache = CacheConfig(enabled=False)
    for _ in range(3):
        os = OperatingSystem(UBUNTU_FIREFOX, config=config)
        assert os.cache is None
        assert os.short_name() == "DEB"
    assert len(loads) == 1


def test_disabled_cache_does_not_memoize(counting_matcher):
    config = Config(cache=CacheConfig(enabled=False))
    os = OperatingSystem(ANDROID_CHROME, matcher=counting_matcher, config=config)
    assert os.short_name() == "AND"
    assert os.short_name() == "AND"
    assert counting_matcher.calls == 2


def test_bytes_user_agent(os_matcher, cache):
    os = _os(ANDROID_CHROME.encode(), os_matcher, cache)
    assert os.short_name() == "AND"
    assert os.full_version() == "13"


def test_undecodable_bytes_user_agent(os_matcher, cache):
    os = _os(b"Mozilla/5.0 (\xff\xfe; Android 12)", os_matcher, cache)
    assert os.user_agent == "Mozilla/5.0 (��; Android 12)"
    assert os.short_name() == "AND"
    assert os.full_version() == "12"


def test_binary_garbage_is_unknown(os_matcher, cache):
    os = _os(bytes(range(256)), os_matcher, cache)
    assert os.short_name() == "UNK"
    assert os.is_desktop() is False


def test_parser_requires_filenames(os_matcher):
    class NoRules(Parser):
        pass

    with pytest.raises(TypeError):
        NoRules(UBUNTU_FIREFOX, matcher=os_matcher)
