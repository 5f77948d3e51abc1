"""
Static operating system registry.

The forward table (short code -> canonical name), its case-folded reverse
index, the family groupings and the code -> family rollup are all built
together by ``build_os_registry`` so they cannot drift apart. The default
registry is built once at import time and is read-only afterwards.
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Sequence

from ..exceptions import RegistryError
from ..logging_config import get_logger
from ..models import OSIdentity

logger = get_logger('os_detection.registry')

UNKNOWN_SHORT_CODE = 'UNK'

SHORT_CODE_PATTERN = re.compile(r'^[A-Z0-9]{2,3}$')

DESKTOP_FAMILIES = (
    'AmigaOS', 'IBM', 'GNU/Linux', 'Mac', 'Unix', 'Windows', 'BeOS', 'Chrome OS',
)

# OS short codes mapped to long names
OPERATING_SYSTEMS = {
    'AIX': 'AIX',
    'AND': 'Android',
    'AMG': 'AmigaOS',
    'ATV': 'tvOS',
    'ARL': 'Arch Linux',
    'BTR': 'BackTrack',
    'SBA': 'Bada',
    'BEO': 'BeOS',
    'BLB': 'BlackBerry OS',
    'QNX': 'BlackBerry Tablet OS',
    'BMP': 'Brew',
    'CAI': 'Caixa Mágica',
    'CES': 'CentOS',
    'COS': 'Chrome OS',
    'CYN': 'CyanogenMod',
    'DEB': 'Debian',
    'DEE': 'Deepin',
    'DFB': 'DragonFly',
    'DVK': 'DVKBuntu',
    'FED': 'Fedora',
    'FEN': 'Fenix',
    'FOS': 'Firefox OS',
    'FIR': 'Fire OS',
    'FRE': 'Freebox',
    'BSD': 'FreeBSD',
    'FYD': 'FydeOS',
    'GNT': 'Gentoo',
    'GRI': 'GridOS',
    'GTV': 'Google TV',
    'HPX': 'HP-UX',
    'HAI': 'Haiku OS',
    'IPA': 'iPadOS',
    'HAR': 'HarmonyOS',
    'HAS': 'HasCodingOS',
    'IRI': 'IRIX',
    'INF': 'Inferno',
    'JME': 'Java ME',
    'KOS': 'KaiOS',
    'KNO': 'Knoppix',
    'KBT': 'Kubuntu',
    'LIN': 'GNU/Linux',
    'LBT': 'Lubuntu',
    'LOS': 'Lumin OS',
    'VLN': 'VectorLinux',
    'MAC': 'Mac',
    'MAE': 'Maemo',
    'MAG': 'Mageia',
    'MDR': 'Mandriva',
    'SMG': 'MeeGo',
    'MCD': 'MocorDroid',
    'MIN': 'Mint',
    'MLD': 'MildWild',
    'MOR': 'MorphOS',
    'NBS': 'NetBSD',
    'MTK': 'MTK / Nucleus',
    'MRE': 'MRE',
    'WII': 'Nintendo',
    'NDS': 'Nintendo Mobile',
    'OS2': 'OS/2',
    'T64': 'OSF1',
    'OBS': 'OpenBSD',
    'ORD': 'Ordissimo',
    'PCL': 'PCLinuxOS',
    'PSP': 'PlayStation Portable',
    'PS3': 'PlayStation',
    'RHT': 'Red Hat',
    'ROS': 'RISC OS',
    'RSO': 'Rosa',
    'REM': 'Remix OS',
    'REX': 'REX',
    'RZD': 'RazoDroiD',
    'SAB': 'Sabayon',
    'SSE': 'SUSE',
    'SAF': 'Sailfish OS',
    'SEE': 'SeewoOS',
    'SLW': 'Slackware',
    'SOS': 'Solaris',
    'SYL': 'Syllable',
    'SYM': 'Symbian',
    'SYS': 'Symbian OS',
    'S40': 'Symbian OS Series 40',
    'S60': 'Symbian OS Series 60',
    'SY3': 'Symbian^3',
    'TDX': 'ThreadX',
    'TIZ': 'Tizen',
    'TOS': 'TmaxOS',
    'UBT': 'Ubuntu',
    'WAS': 'watchOS',
    'WTV': 'WebTV',
    'WHS': 'Whale OS',
    'WIN': 'Windows',
    'WCE': 'Windows CE',
    'WIO': 'Windows IoT',
    'WMO': 'Windows Mobile',
    'WPH': 'Windows Phone',
    'WRT': 'Windows RT',
    'XBX': 'Xbox',
    'XBT': 'Xubuntu',
    'YNS': 'YunOs',
    'IOS': 'iOS',
    'POS': 'palmOS',
    'WOS': 'webOS',
}

OS_FAMILIES = {
    'Android': ('AND', 'CYN', 'FIR', 'REM', 'RZD', 'MLD', 'MCD', 'YNS', 'GRI', 'HAR'),
    'AmigaOS': ('AMG', 'MOR'),
    'BlackBerry': ('BLB', 'QNX'),
    'Brew': ('BMP',),
    'BeOS': ('BEO', 'HAI'),
    'Chrome OS': ('COS', 'FYD', 'SEE'),
    'Firefox OS': ('FOS', 'KOS'),
    'Gaming Console': ('WII', 'PS3'),
    'Google TV': ('GTV',),
    'IBM': ('OS2',),
    'iOS': ('IOS', 'ATV', 'WAS', 'IPA'),
    'RISC OS': ('ROS',),
    'GNU/Linux': (
        'LIN', 'ARL', 'DEB', 'KNO', 'MIN', 'UBT', 'KBT', 'XBT', 'LBT', 'FED',
        'RHT', 'VLN', 'MDR', 'GNT', 'SAB', 'SLW', 'SSE', 'CES', 'BTR', 'SAF',
        'ORD', 'TOS', 'RSO', 'DEE', 'FRE', 'MAG', 'FEN', 'CAI', 'PCL', 'HAS',
        'LOS', 'DVK',
    ),
    'Mac': ('MAC',),
    'Mobile Gaming Console': ('PSP', 'NDS', 'XBX'),
    'Real-time OS': ('MTK', 'TDX', 'MRE', 'JME', 'REX'),
    'Other Mobile': ('WOS', 'POS', 'SBA', 'TIZ', 'SMG', 'MAE'),
    'Symbian': ('SYM', 'SYS', 'SY3', 'S60', 'S40'),
    'Unix': ('SOS', 'AIX', 'HPX', 'BSD', 'NBS', 'OBS', 'DFB', 'SYL', 'IRI', 'T64', 'INF'),
    'WebTV': ('WTV',),
    'Windows': ('WIN',),
    'Windows Mobile': ('WPH', 'WMO', 'WCE', 'WRT', 'WIO'),
    'Other Smart TV': ('WHS',),
}


# Compared and hashed by identity so a registry can be part of a cache key
@dataclass(frozen=True, eq=False)
class OSRegistry:
    """Read-only registry of OS identities, families and desktop classes."""
    operating_systems: Mapping[str, str]
    names_index: Mapping[str, str]  # casefolded canonical name -> short code
    families: Mapping[str, tuple]
    family_index: Mapping[str, str]  # short code -> family
    desktop_families: frozenset

    def canonicalize(self, extracted_name: Optional[str]) -> OSIdentity:
        """
        Map an extracted display name to its registry identity.

        Unmatched names, including None and "", keep their spelling and get
        the UNK short code.
        """
        if extracted_name:
            short_code = self.names_index.get(extracted_name.casefold())
            if short_code is not None:
                return OSIdentity(short_code=short_code, name=self.operating_systems[short_code])
        return OSIdentity(short_code=UNKNOWN_SHORT_CODE, name=extracted_name)

    def family_of(self, short_code: str) -> Optional[str]:
        return self.family_index.get(short_code)

    def is_desktop_family(self, family: Optional[str]) -> bool:
        return bool(family) and family in self.desktop_families


def build_os_registry(operating_systems: Mapping[str, str] = OPERATING_SYSTEMS,
                      families: Mapping[str, Sequence[str]] = OS_FAMILIES,
                      desktop_families: Optional[Iterable[str]] = None) -> OSRegistry:
    """
    Build and validate the forward table and all derived indices.

    Raises:
        RegistryError: On malformed codes, duplicate names, codes listed in
            more than one family or families referencing unknown codes
    """
    names_index = {}
    for short_code, name in operating_systems.items():
        if not SHORT_CODE_PATTERN.match(short_code):
            raise RegistryError(f"malformed short code {short_code!r}", registry='operating system')
        folded = name.casefold()
        if folded in names_index:
            raise RegistryError(
                f"canonical name {name!r} is used by both {names_index[folded]} and {short_code}",
                registry='operating system',
            )
        names_index[folded] = short_code

    family_index = {}
    for family, short_codes in families.items():
        for short_code in short_codes:
            if short_code not in operating_systems:
                raise RegistryError(f"family {family!r} lists unknown short code {short_code!r}",
                                    registry='os family')
            if short_code in family_index:
                raise RegistryError(
                    f"short code {short_code!r} is in both {family_index[short_code]!r} and {family!r}",
                    registry='os family',
                )
            family_index[short_code] = family

    desktop = frozenset(DESKTOP_FAMILIES if desktop_families is None else desktop_families)
    unknown_desktop = desktop - set(families)
    if unknown_desktop:
        # Not fatal: a family may be flagged before any OS is grouped under it
        logger.warning(f"Desktop families with no registered OS: {sorted(unknown_desktop)}")

    return OSRegistry(
        operating_systems=MappingProxyType(dict(operating_systems)),
        names_index=MappingProxyType(names_index),
        families=MappingProxyType({family: tuple(codes) for family, codes in families.items()}),
        family_index=MappingProxyType(family_index),
        desktop_families=desktop,
    )


try:
    _REGISTRY = build_os_registry()
except RegistryError as e:
    logger.error(f"Failed to build OS registry: {e}")
    raise


def get_os_registry() -> OSRegistry:
    """The default registry, built at import."""
    return _REGISTRY


def canonicalize(extracted_name: Optional[str]) -> OSIdentity:
    return _REGISTRY.canonicalize(extracted_name)


def family_of(short_code: str) -> Optional[str]:
    return _REGISTRY.family_of(short_code)
