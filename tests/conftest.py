import pytest

from buildlink.config import CodecConfig
from buildlink.decoder import ShareDecoder
from buildlink.encoder import ShareEncoder
from buildlink.personas import Persona, PersonaCatalog
from buildlink.registry import Field, IdRegistry, IdTable
from buildlink.safety import TierMap
from buildlink.types import Tier


@pytest.fixture
def personas():
    return PersonaCatalog([
        Persona(id="gamer", display_name="Gamer", subtitle="Balanced build",
                rarity="uncommon", risk="low", highlights=["Low overhead"]),
        Persona(id="streamer", display_name="Streamer", subtitle="Capture-ready",
                rarity="rare", risk="medium"),
    ])


@pytest.fixture
def small_registry():
    return IdRegistry({
        Field.CPU: IdTable.sequential(["amd_x3d", "amd", "intel"]),
        Field.GPU: IdTable.sequential(["nvidia", "amd"]),
        Field.DNS: IdTable.sequential(["cloudflare", "google", "quad9"]),
        Field.PERIPHERAL: IdTable.sequential(["logitech"]),
        Field.MONITOR: IdTable.sequential(["dell"]),
        Field.OPTIMIZATION: IdTable.sequential(["pagefile", "fastboot"]),
        Field.PERSONA: IdTable({"gamer": 4, "streamer": 3}),
    })


@pytest.fixture
def small_tiers():
    return TierMap({"pagefile": Tier.SAFE, "fastboot": Tier.CAUTION})


@pytest.fixture
def small_config(small_registry, small_tiers, personas):
    return CodecConfig(registry=small_registry, tiers=small_tiers, personas=personas)


@pytest.fixture
def config():
    return CodecConfig()


@pytest.fixture
def encoder(config):
    return ShareEncoder(config)


@pytest.fixture
def decoder(config):
    return ShareDecoder(config)
