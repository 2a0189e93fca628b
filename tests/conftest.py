"""Shared fixtures: sample baseline and drifted device configurations."""

from __future__ import annotations

import pytest
import structlog

BASELINE_CONFIG = """\
!
! ===== Core Router Configuration =====
!
hostname CORE-R1
service timestamps debug datetime msec
ntp server 10.10.10.10
logging host 10.10.10.20
logging trap informational
ip route 0.0.0.0 0.0.0.0 192.168.1.1
!
! ----- Interfaces -----
interface GigabitEthernet0/0
 description Uplink to ISP
 ip address 10.0.0.1 255.255.255.252
 duplex full
 speed 1000
 ip ospf cost 10
 no shutdown
!
interface GigabitEthernet0/1
 description LAN
 ip address 192.168.10.1 255.255.255.0
 no shutdown
!
router ospf 1
 network 10.0.0.0 0.0.0.3 area 0
 network 192.168.10.0 0.0.0.255 area 0
!
access-list 10 permit 192.168.10.0 0.0.0.255
banner motd ^C Authorized access only ^C
!
end
"""

# Same device after drift: new hostname, NTP server and description (all
# allowed to vary), a changed duplex, a removed OSPF network and an added
# static route.
DRIFTED_CONFIG = """\
hostname CORE-R1-NEW
service timestamps debug datetime msec
ntp server 10.10.10.11
logging host 10.10.10.20
logging trap informational
ip route 0.0.0.0 0.0.0.0 192.168.1.1
ip route 172.16.0.0 255.255.0.0 10.0.0.2
interface GigabitEthernet0/0
 description Uplink to ISP (circuit 42)
 ip address 10.0.0.1 255.255.255.252
 duplex auto
 speed 1000
 no shutdown
interface GigabitEthernet0/1
 description LAN
 ip address 192.168.10.1 255.255.255.0
 no shutdown
router ospf 1
 network 10.0.0.0 0.0.0.3 area 0
access-list 10 permit 192.168.10.0 0.0.0.255
banner motd ^C Authorized access only ^C
end
"""


@pytest.fixture
def baseline_config() -> str:
    """23 lines once cleaned; 20 match a rule, the other three
    ('service timestamps ...', 'ip ospf cost 10', 'end') are generic."""
    return BASELINE_CONFIG


@pytest.fixture
def drifted_config() -> str:
    return DRIFTED_CONFIG


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Keep logging configuration from leaking between tests."""
    yield
    structlog.reset_defaults()
