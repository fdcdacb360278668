"""
API tests for brand and brand category endpoints.
"""

import pytest
from uuid import uuid4

from django.urls import reverse
from rest_framework import status

from apps.brands.models import Brand, BrandCategory


@pytest.mark.django_db
class TestBrandReadAPI:

    def test_search_is_public(self, api_client, brands):
        response = api_client.get(reverse('brands:brand-list'), {'limit': 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total'] == 3
        assert response.data['total_pages'] == 2
        assert len(response.data['brands']) == 2

    def test_search_by_query(self, api_client, brands):
        response = api_client.get(reverse('brands:brand-list'), {'query': 'street'})

        assert [b['name'] for b in response.data['brands']] == ['Style Street']

    def test_search_invalid_limit(self, api_client):
        response = api_client.get(reverse('brands:brand-list'), {'limit': 0})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_active(self, api_client, brands):
        response = api_client.get(reverse('brands:brand-active'))

        assert response.status_code == status.HTTP_200_OK
        assert [b['name'] for b in response.data] == ['Cafe Corra', 'Style Street']

    def test_by_category(self, api_client, brands, food):
        url = reverse('brands:brand-by-category', kwargs={'category_id': food.id})

        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [b['name'] for b in response.data] == ['Cafe Corra']
        assert response.data[0]['category']['name'] == 'Food'

    def test_retrieve(self, api_client, brand):
        response = api_client.get(reverse('brands:brand-detail', kwargs={'pk': brand.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['earning_percentage'] == '10.00'
        assert response.data['category_id'] == str(brand.category_id)

    def test_retrieve_missing(self, api_client, db):
        response = api_client.get(reverse('brands:brand-detail', kwargs={'pk': uuid4()}))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Brand not found'


@pytest.mark.django_db
class TestBrandWriteAPI:

    def test_create(self, admin_api_client, food):
        data = {
            'name': 'Burger Barn',
            'category_id': str(food.id),
            'earning_percentage': '12.50',
            'redemption_percentage': '25.00',
            'brandwise_max_cap': 1000,
        }

        response = admin_api_client.post(reverse('brands:brand-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['max_redemption_amount'] == 1000
        assert Brand.objects.filter(name='Burger Barn').exists()

    def test_create_duplicate(self, admin_api_client, brand):
        response = admin_api_client.post(reverse('brands:brand-list'), {'name': 'Cafe Corra'}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_invalid_rules(self, admin_api_client, db):
        data = {'name': 'Greedy', 'earning_percentage': '60', 'redemption_percentage': '60'}

        response = admin_api_client.post(reverse('brands:brand-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'max 100%' in response.data['error']

    def test_create_requires_admin(self, user_client, db):
        response = user_client.post(reverse('brands:brand-list'), {'name': 'Sneaky'}, format='json')
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_anonymous(self, api_client, db):
        response = api_client.post(reverse('brands:brand-list'), {'name': 'Sneaky'}, format='json')
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_partial_update(self, admin_api_client, brand):
        url = reverse('brands:brand-detail', kwargs={'pk': brand.id})

        response = admin_api_client.patch(url, {'description': 'Now with bagels'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['description'] == 'Now with bagels'
        assert response.data['name'] == 'Cafe Corra'

    def test_toggle_status(self, admin_api_client, brand):
        url = reverse('brands:brand-toggle-status', kwargs={'pk': brand.id})

        response = admin_api_client.patch(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_active'] is False

    def test_delete(self, admin_api_client, brand):
        response = admin_api_client.delete(reverse('brands:brand-detail', kwargs={'pk': brand.id}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Brand.objects.filter(id=brand.id).exists()


@pytest.mark.django_db
class TestBrandCategoryAPI:

    def test_list_is_public(self, api_client, food, fashion):
        response = api_client.get(reverse('brands:category-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [c['name'] for c in response.data] == ['Fashion', 'Food']

    def test_create(self, admin_api_client, db):
        data = {'name': 'Travel', 'icon': 'plane', 'color': '#123ABC'}

        response = admin_api_client.post(reverse('brands:category-list'), data, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert BrandCategory.objects.filter(name='Travel').exists()

    def test_create_bad_color(self, admin_api_client, db):
        data = {'name': 'Travel', 'color': 'blue'}

        response = admin_api_client.post(reverse('brands:category-list'), data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'color' in response.data

    def test_create_duplicate(self, admin_api_client, food):
        response = admin_api_client.post(reverse('brands:category-list'), {'name': 'Food'}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_in_use(self, admin_api_client, brand, food):
        response = admin_api_client.delete(reverse('brands:category-detail', kwargs={'pk': food.id}))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert BrandCategory.objects.filter(id=food.id).exists()

    def test_retrieve_missing(self, api_client, db):
        response = api_client.get(reverse('brands:category-detail', kwargs={'pk': uuid4()}))
        assert response.status_code == status.HTTP_404_NOT_FOUND
