import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status


@pytest.mark.django_db
class TestStatsEndpoint:
    """Tests for GET /api/analytics/stats/"""

    def test_stats(self, analyst_client, january_ledger):
        url = reverse('analytics:stats')
        response = analyst_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['storage']['is_database'] is True
        assert response.data['counts']['transactions'] == 6
        assert response.data['total_balance'] == '2080.00'
        assert response.data['total_income'] == '4000.00'
        assert response.data['total_expenses'] == '2420.00'

    def test_requires_family(self, loner_client):
        url = reverse('analytics:stats')
        response = loner_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_requires_authentication(self, api_client):
        url = reverse('analytics:stats')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestDashboardEndpoint:
    """Tests for GET /api/analytics/dashboard/"""

    def test_dashboard_for_period(self, analyst_client, january_ledger):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url, {'period': '2025-01'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['start_date'] == '2025-01-01'
        assert response.data['end_date'] == '2025-01-31'
        assert response.data['monthly_income'] == '4000.00'
        assert response.data['monthly_expenses'] == '2370.00'
        assert response.data['savings_rate'] == 40.75
        assert len(response.data['daily']) == 7
        assert response.data['daily'][-1]['date'] == '2025-01-31'
        assert len(response.data['recent_transactions']) == 5
        assert response.data['recent_transactions'][0]['date'] == '2025-02-02'

    def test_period_wins_over_dates(self, analyst_client, january_ledger):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url, {
            'period': '2025-02',
            'start_date': '2025-01-01',
            'end_date': '2025-01-31',
        })

        assert response.data['start_date'] == '2025-02-01'
        assert response.data['end_date'] == '2025-02-28'
        assert response.data['monthly_expenses'] == '50.00'

    def test_explicit_range(self, analyst_client, january_ledger):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url, {'start_date': '2025-01-01', 'end_date': '2025-01-05'})

        assert response.data['monthly_income'] == '4000.00'
        assert response.data['monthly_expenses'] == '1500.00'

    def test_defaults_to_current_month(self, analyst_client):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url)

        today = timezone.localdate()
        assert response.status_code == status.HTTP_200_OK
        assert response.data['start_date'] == today.replace(day=1).isoformat()
        assert response.data['savings_rate'] == 0

    def test_inverted_range(self, analyst_client):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url, {'start_date': '2025-02-01', 'end_date': '2025-01-01'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'start_date' in response.data

    def test_invalid_period(self, analyst_client):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url, {'period': '2025-1'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_period_year_zero(self, analyst_client):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url, {'period': '0000-01'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'period' in response.data

    def test_daily_window_at_first_supported_date(self, analyst_client):
        url = reverse('analytics:dashboard')
        response = analyst_client.get(url, {'start_date': '0001-01-01', 'end_date': '0001-01-03'})

        assert response.status_code == status.HTTP_200_OK
        assert [point['date'] for point in response.data['daily']] == [
            '0001-01-01', '0001-01-02', '0001-01-03',
        ]


@pytest.mark.django_db
class TestBudgetEndpoint:
    """Tests for GET /api/analytics/budget/"""

    def test_budget(self, analyst_client, january_ledger):
        url = reverse('analytics:budget')
        response = analyst_client.get(url, {'period': '2025-01'})

        assert response.status_code == status.HTTP_200_OK
        rows = {row['name']: row for row in response.data['categories']}
        assert rows['Groceries']['spent'] == '540.00'
        assert rows['Groceries']['percentage'] == 90.0
        assert rows['Groceries']['near_limit'] is True
        assert rows['Cafes & restaurants']['over_budget'] is True
        assert response.data['total_limit'] == '2950.00'
        assert response.data['total_spent'] == '2370.00'
        assert response.data['total_percentage'] == 80.34

    def test_budget_requires_family(self, loner_client):
        url = reverse('analytics:budget')
        response = loner_client.get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
