"""
Tests for cloud alternative matching.
"""

from infra_pricing.domain.enums import CloudProvider, Distribution
from infra_pricing.services.cloud_alternatives import (
    GENERIC_ALTERNATIVES,
    alternatives_for,
    generic_alternatives,
    get_cloud_alternatives,
    is_on_prem_distribution,
)


def test_openshift_specific_first_then_missing_generic():
    """ROSA/ARO/OSD/ROKS, then only the generic providers not already covered."""
    alternatives = get_cloud_alternatives(Distribution.OPENSHIFT)
    names = [alt.name for alt in alternatives]
    assert names[:2] == ['ROSA', 'ARO']
    assert names[-1] == 'OKE'
    assert len(alternatives) == 5
    assert len({alt.provider for alt in alternatives}) == 5


def test_recommended_openshift_alternatives():
    recommended = [alt.name for alt in alternatives_for(Distribution.OPENSHIFT) if alt.is_recommended]
    assert recommended == ['ROSA', 'ARO']


def test_k3s_gets_lightweight_clouds():
    alternatives = get_cloud_alternatives(Distribution.K3S)
    providers = [alt.provider for alt in alternatives]
    assert providers[:3] == [CloudProvider.DIGITALOCEAN, CloudProvider.LINODE, CloudProvider.HETZNER]
    assert CloudProvider.AWS in providers
    assert len(alternatives) == 7


def test_microk8s_alternatives_are_tagged():
    alternatives = alternatives_for(Distribution.MICROK8S)
    assert alternatives
    assert all(alt.source_distribution == Distribution.MICROK8S for alt in alternatives)


def test_rke2_tagging_adds_consideration():
    alternatives = alternatives_for(Distribution.RKE2)
    assert len(alternatives) == len(GENERIC_ALTERNATIVES)
    for alt in alternatives:
        assert alt.source_distribution == Distribution.RKE2
        assert 'RKE2-specific configurations may need adaptation' in alt.considerations


def test_tagging_does_not_alter_shared_catalog():
    """Generic entries are copied before being tagged."""
    alternatives_for(Distribution.RKE2)
    alternatives_for(Distribution.CHARMED)
    for alt in GENERIC_ALTERNATIVES:
        assert alt.source_distribution is None
        assert alt.considerations == ()


def test_generic_fallback_for_cloud_distribution():
    """Distributions without a curated list get the generic one."""
    assert alternatives_for(Distribution.EKS) == generic_alternatives()


def test_vanilla_kubernetes_gets_generic():
    alternatives = get_cloud_alternatives(Distribution.KUBERNETES)
    assert [alt.name for alt in alternatives] == ['EKS', 'AKS', 'GKE', 'OKE']


def test_is_on_prem_distribution():
    assert is_on_prem_distribution(Distribution.OPENSHIFT)
    assert is_on_prem_distribution(Distribution.K3S)
    assert not is_on_prem_distribution(Distribution.EKS)
    assert not is_on_prem_distribution(Distribution.RANCHER_EKS)


def test_alternative_to_dict():
    data = get_cloud_alternatives(Distribution.TANZU)[0].to_dict()
    assert data['provider'] == 'AWS'
    assert data['source_distribution'] == 'Tanzu'
    assert isinstance(data['features'], list)


def test_tagged_generic_entries_survive_merge():
    """RKE2 and Charmed keep their annotated copies of the generic providers."""
    alternatives = get_cloud_alternatives(Distribution.RKE2)
    assert [alt.name for alt in alternatives] == ['EKS', 'AKS', 'GKE', 'OKE']
    for alt in alternatives:
        assert alt.source_distribution == Distribution.RKE2
        assert 'RKE2-specific configurations may need adaptation' in alt.considerations

    charmed = get_cloud_alternatives(Distribution.CHARMED)
    assert all(alt.source_distribution == Distribution.CHARMED for alt in charmed)


def test_microk8s_merge_keeps_tags():
    alternatives = get_cloud_alternatives(Distribution.MICROK8S)
    assert len(alternatives) == 7
    assert all(alt.source_distribution == Distribution.MICROK8S for alt in alternatives)
