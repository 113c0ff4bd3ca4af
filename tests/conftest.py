import pytest

from deployment import token_pool
from deployment.constants import PROXY_CONTRACT_NAME, PoolType, TokenContractName
from deployment.networks import NetworkRegistry
from deployment.params import Deployer
from tests.fakes import FakeAccount, FakeContainer, FakeExplorer


@pytest.fixture
def registry():
    return NetworkRegistry.from_environment(environ={})


@pytest.fixture
def network_config(registry):
    return registry.resolve("soneium")


@pytest.fixture
def deployer_account():
    return FakeAccount()


@pytest.fixture
def deployer(network_config, deployer_account):
    return Deployer(network_config=network_config, account=deployer_account, autosign=True)


@pytest.fixture
def containers(monkeypatch):
    names = [token.value for token in TokenContractName]
    names += [PROXY_CONTRACT_NAME]
    names += [pool_type.contract_name for pool_type in PoolType]
    fake_containers = {name: FakeContainer(name) for name in names}
    monkeypatch.setattr(token_pool, "get_contract_container", lambda name: fake_containers[name])
    return fake_containers


@pytest.fixture
def explorer():
    return FakeExplorer()
