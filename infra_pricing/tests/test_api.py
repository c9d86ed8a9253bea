"""
Tests for the HTTP API.
"""

import pytest


def cluster_request(**overrides):
    body = {
        'provider': 'AWS',
        'distribution': 'EKS',
        'region': 'us-east-1',
        'environments': {
            'Dev': {'nodes': 3, 'cpu_per_node': 4, 'ram_gb_per_node': 16},
            'Prod': {'nodes': 5, 'cpu_per_node': 8, 'ram_gb_per_node': 32},
        },
    }
    body.update(overrides)
    return body


def on_prem_request(**overrides):
    body = {
        'distribution': 'OpenShift',
        'environments': {'Prod': {'nodes': 10}},
    }
    body.update(overrides)
    return body


def test_health(client):
    response = client.get('/health')
    assert response.status_code == 200
    assert response.json() == {'status': 'ok'}


# Rate cards

def test_list_providers(client):
    data = client.get('/api/pricing/providers').json()
    assert 'AWS' in data['providers']
    assert 'ROSA' in data['providers']
    assert 'OpenShift' in data['distributions']


def test_provider_pricing_for_region(client):
    response = client.get('/api/pricing/providers/AWS', params={'region': 'eu-west-1'})
    assert response.status_code == 200
    assert response.json()['pricing']['region'] == 'eu-west-1'


def test_unknown_provider_404(client):
    assert client.get('/api/pricing/providers/Nimbus').status_code == 404
    assert client.get('/api/pricing/providers/Nimbus/regions').status_code == 404


def test_provider_regions(client):
    data = client.get('/api/pricing/providers/Azure/regions').json()
    codes = [region['code'] for region in data['regions']]
    assert 'eastus' in codes


# Licensing

def test_openshift_licensing(client):
    response = client.post('/api/pricing/licensing', json={'distribution': 'OpenShift', 'node_count': 20})
    assert response.status_code == 200
    data = response.json()
    assert data['recognized'] is True
    assert data['has_license_cost'] is True
    assert data['licensing']['total_per_year'] == 50000.0
    assert data['licensing']['total_per_month'] == 4166.67
    assert data['support_tiers']


def test_unknown_distribution_priced_at_zero(client):
    response = client.post('/api/pricing/licensing', json={'distribution': 'Nomad', 'node_count': 5})
    assert response.status_code == 200
    data = response.json()
    assert data['recognized'] is False
    assert data['has_license_cost'] is False
    assert data['licensing']['total_per_year'] == 0


def test_licensing_validation(client):
    response = client.post('/api/pricing/licensing', json={'distribution': 'OpenShift', 'node_count': -1})
    assert response.status_code == 422


# Estimates

def test_kubernetes_estimate(client):
    response = client.post('/api/estimates/kubernetes', json=cluster_request())
    assert response.status_code == 200
    data = response.json()
    assert data['include_pricing_in_results'] is True
    estimate = data['estimate']
    assert estimate['provider'] == 'AWS'
    assert estimate['monthly_total'].startswith('$')
    assert estimate['breakdown'][0]['category'] == 'Compute'


def test_kubernetes_estimate_rejects_on_prem(client):
    response = client.post('/api/estimates/kubernetes', json=cluster_request(provider='OnPrem'))
    assert response.status_code == 400


def test_kubernetes_estimate_rejects_empty_cluster(client):
    response = client.post(
        '/api/estimates/kubernetes',
        json=cluster_request(environments={'Dev': {'nodes': 0}}),
    )
    assert response.status_code == 400
    assert 'Failed to estimate costs' in response.json()['detail']


def test_unknown_distribution_is_422(client):
    response = client.post('/api/estimates/kubernetes', json=cluster_request(distribution='Nomad'))
    assert response.status_code == 422


def test_on_prem_estimate(client):
    response = client.post('/api/estimates/on-prem', json=on_prem_request())
    assert response.status_code == 200
    estimate = response.json()['estimate']
    assert estimate['provider'] == 'OnPrem'
    assert estimate['region'] == 'On-Premises Data Center'
    categories = [item['category'] for item in estimate['breakdown']]
    assert categories[0] == 'Labor'


def test_on_prem_estimate_hides_pricing(client):
    response = client.post('/api/estimates/on-prem', json=on_prem_request(include_pricing_in_results=False))
    assert response.status_code == 200
    data = response.json()
    assert data['include_pricing_in_results'] is False
    assert data['estimate']['monthly_total'] == 'N/A'
    assert all(item['monthly'] == 'N/A' for item in data['estimate']['breakdown'])


def test_on_prem_pricing_overrides(client):
    default = client.post('/api/estimates/on-prem', json=on_prem_request()).json()
    cheaper = client.post(
        '/api/estimates/on-prem',
        json=on_prem_request(on_prem_pricing={'labor': {'devops_engineer_monthly': 6000}}),
    ).json()
    labour = {
        item['category']: item['monthly'] for item in cheaper['estimate']['breakdown']
    }
    assert labour['Labor'] == '$24,000'
    assert cheaper['estimate']['monthly_total'] != default['estimate']['monthly_total']


def test_on_prem_unknown_override_rejected(client):
    response = client.post('/api/estimates/on-prem', json=on_prem_request(on_prem_pricing={'bogus': 1}))
    assert response.status_code == 400


def test_compare(client):
    response = client.post(
        '/api/estimates/compare',
        json={'options': [cluster_request(), on_prem_request(provider='OnPrem')]},
    )
    assert response.status_code == 200
    comparison = response.json()['comparison']
    assert comparison['cheapest'] == 'AWS-us-east-1'
    assert len(comparison['estimates']) == 2
    assert comparison['insights']


def test_compare_needs_two_options(client):
    response = client.post('/api/estimates/compare', json={'options': [cluster_request()]})
    assert response.status_code == 422


# Low-code platforms

def test_mendix_quote(client):
    response = client.post('/api/lowcode/mendix', json={
        'category': 'PrivateCloud',
        'private_cloud_provider': 'EKS',
        'number_of_environments': 60,
        'internal_users': 0,
        'apply_volume_discount': False,
    })
    assert response.status_code == 200
    pricing = response.json()['pricing']
    assert pricing['environment_cost'] == 30024.0
    assert pricing['total_per_year'] == 65400.0 + 6360.0 + 30024.0


def test_mendix_unpriceable_config(client):
    response = client.post('/api/lowcode/mendix', json={
        'category': 'Cloud',
        'resource_pack_tier': 'Premium',
        'resource_pack_size': 'XS',
    })
    assert response.status_code == 400


def test_mendix_category_required(client):
    assert client.post('/api/lowcode/mendix', json={}).status_code == 422


def test_outsystems_quote(client):
    response = client.post('/api/lowcode/outsystems', json={'total_aos': 320})
    assert response.status_code == 200
    pricing = response.json()['pricing']
    assert pricing['additional_ao_cost'] == 36000.0
    assert pricing['ao_pack_count'] == 2


def test_outsystems_odc_quote_with_discount(client):
    response = client.post('/api/lowcode/outsystems', json={
        'platform': 'ODC',
        'total_aos': 300,
        'use_unlimited_users': True,
        'discount': {'type': 'FixedAmount', 'value': 1000, 'scope': 'LicenseOnly'},
    })
    assert response.status_code == 200
    pricing = response.json()['pricing']
    assert pricing['platform'] == 'ODC'
    assert pricing['user_cost'] == 121000.0
    assert pricing['discount_amount'] == 1000.0
    assert pricing['total_per_year'] == 30250.0 + 18150.0 + 121000.0 - 1000.0


def test_outsystems_odc_self_managed_rejected(client):
    response = client.post('/api/lowcode/outsystems', json={'platform': 'ODC', 'deployment': 'SelfManaged'})
    assert response.status_code == 400


def test_discount_over_one_hundred_percent_rejected(client):
    response = client.post('/api/lowcode/mendix', json={
        'category': 'PrivateCloud',
        'discount': {'type': 'Percentage', 'value': 150},
    })
    assert response.status_code == 400


@pytest.mark.parametrize('body', [
    {'production_environments': 0},
    {'total_aos': -5},
    {'edition': 'Platinum'},
])
def test_outsystems_validation(client, body):
    assert client.post('/api/lowcode/outsystems', json=body).status_code == 422


# Cloud alternatives

def test_alternatives_for_openshift(client):
    response = client.get('/api/alternatives/OpenShift')
    assert response.status_code == 200
    data = response.json()
    assert data['is_on_prem'] is True
    assert [alt['name'] for alt in data['alternatives']][:2] == ['ROSA', 'ARO']


def test_alternatives_unknown_distribution(client):
    assert client.get('/api/alternatives/Nomad').status_code == 404
