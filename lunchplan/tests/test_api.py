import unittest
from fastapi.testclient import TestClient
from lunchplan.api.api_run import create_app
from lunchplan.infra.Storage import InMemoryStorage

ALICE = {"X-User-Id": "alice", "X-User-Email": "alice@example.com"}
BOB = {"X-User-Id": "bob", "X-User-Email": "bob@example.com"}


class ApiTestCase(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(InMemoryStorage()))

    def _ingredient(self, name, headers=ALICE):
        resp = self.client.post('/api/ingredients', json={'name': name}, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()['ingredient']

    def _meal(self, title, entries, headers=ALICE):
        resp = self.client.post('/api/meals', json={'title': title, 'ingredients': entries}, headers=headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()['meal']


class TestIdentityAndErrors(ApiTestCase):

    def test_health(self):
        resp = self.client.get('/health')
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['status'], 'UP')

    def test_missing_identity_is_unauthorized(self):
        resp = self.client.get('/api/ingredients')
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()['kind'], 'Unauthorized')

    def test_non_object_body_is_invalid_argument(self):
        resp = self.client.post('/api/ingredients', json=['Flour'], headers=ALICE)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()['kind'], 'InvalidArgument')


class TestIngredientsApi(ApiTestCase):

    def test_crud_and_ownership(self):
        flour = self._ingredient('Flour')
        iid = flour['ingredientId']
        self.assertEqual(flour['createdAt'], flour['updatedAt'])

        resp = self.client.get('/api/ingredients', headers=ALICE)
        self.assertEqual([i['name'] for i in resp.json()['ingredients']], ['Flour'])
        self.assertEqual(self.client.get('/api/ingredients', headers=BOB).json()['ingredients'], [])

        self.assertEqual(self.client.get(f'/api/ingredients/{iid}', headers=BOB).status_code, 403)
        self.assertEqual(self.client.put(f'/api/ingredients/{iid}', json={'name': 'x'}, headers=BOB).status_code, 403)
        self.assertEqual(self.client.delete(f'/api/ingredients/{iid}', headers=BOB).status_code, 403)

        resp = self.client.put(f'/api/ingredients/{iid}', json={'name': 'Rye flour', 'userId': 'bob'}, headers=ALICE)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['ingredient']['name'], 'Rye flour')
        self.assertEqual(resp.json()['ingredient']['userId'], 'alice')

        self.assertEqual(self.client.delete(f'/api/ingredients/{iid}', headers=ALICE).status_code, 200)
        resp = self.client.get(f'/api/ingredients/{iid}', headers=BOB)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()['kind'], 'NotFound')

    def test_name_required(self):
        resp = self.client.post('/api/ingredients', json={'name': '   '}, headers=ALICE)
        self.assertEqual(resp.status_code, 400)


class TestMealsApi(ApiTestCase):

    def test_meal_validation(self):
        resp = self.client.post('/api/meals', json={'title': 'Nothing', 'ingredients': []}, headers=ALICE)
        self.assertEqual(resp.status_code, 400)
        resp = self.client.post('/api/meals', json={'title': 'Half', 'ingredients': [
            {'ingredientId': 'a', 'quantity': '1'}, {'ingredientId': 'b'}]}, headers=ALICE)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get('/api/meals', headers=ALICE).json()['meals'], [])

    def test_update_by_other_user_is_forbidden(self):
        meal = self._meal('Soup', [{'ingredientId': 'leek', 'quantity': '2'}])
        body = {'title': 'Stolen', 'ingredients': [{'ingredientId': 'x', 'quantity': '1'}]}
        resp = self.client.put(f"/api/meals/{meal['mealId']}", json=body, headers=BOB)
        self.assertEqual(resp.status_code, 403)
        resp = self.client.put('/api/meals/missing', json=body, headers=BOB)
        self.assertEqual(resp.status_code, 404)
        resp = self.client.get(f"/api/meals/{meal['mealId']}", headers=ALICE)
        self.assertEqual(resp.json()['meal']['title'], 'Soup')


class TestPlansApi(ApiTestCase):

    def test_plan_day_lifecycle(self):
        resp = self.client.get('/api/plans/2024-06-01', headers=ALICE)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['planDay'], {'userId': 'alice', 'date': '2024-06-01', 'meals': []})

        meal = self._meal('Soup', [{'ingredientId': 'leek', 'quantity': '2'}])
        resp = self.client.put('/api/plans/2024-06-01', json={'meals': [meal['mealId']]}, headers=ALICE)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()['planDay']['meals'], [meal['mealId']])

        # bob may not plan alice's meal
        resp = self.client.put('/api/plans/2024-06-01', json={'meals': [meal['mealId']]}, headers=BOB)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.put('/api/plans/01-06-2024', json={'meals': []}, headers=ALICE)
        self.assertEqual(resp.status_code, 400)
        for body in ({}, {'meals': [42]}, {'meals': meal['mealId']}):
            resp = self.client.put('/api/plans/2024-06-01', json=body, headers=ALICE)
            self.assertEqual(resp.status_code, 400, body)
            self.assertEqual(resp.json()['kind'], 'InvalidArgument')

        self.assertEqual(self.client.delete('/api/plans/2024-06-01', headers=ALICE).status_code, 200)
        self.assertEqual(self.client.get('/api/plans', headers=ALICE).json()['planDays'], [])

    def test_range_and_clear(self):
        for d in ('2024-06-01', '2024-06-02', '2024-06-03'):
            self.client.put(f'/api/plans/{d}', json={'meals': []}, headers=ALICE)
        resp = self.client.get('/api/plans', params={'startDate': '2024-06-02', 'endDate': '2024-06-03'}, headers=ALICE)
        self.assertEqual([d['date'] for d in resp.json()['planDays']], ['2024-06-02', '2024-06-03'])

        resp = self.client.delete('/api/plans', headers=ALICE)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()['deleted'], 3)
        self.assertEqual(self.client.get('/api/plans', headers=ALICE).json()['planDays'], [])

    def test_shopping_list(self):
        rice = self._ingredient('Rice')
        eggs = self._ingredient('Eggs')
        m1 = self._meal('M1', [{'ingredientId': rice['ingredientId'], 'quantity': '200g', 'name': 'Rice'}])
        m2 = self._meal('M2', [
            {'ingredientId': rice['ingredientId'], 'quantity': '1 cup', 'name': 'Rice'},
            {'ingredientId': eggs['ingredientId'], 'quantity': '3', 'name': 'Eggs'},
        ])
        self.client.put('/api/plans/2024-06-01', json={'meals': [m1['mealId']]}, headers=ALICE)
        self.client.put('/api/plans/2024-06-02', json={'meals': [m2['mealId']]}, headers=ALICE)

        resp = self.client.get('/api/plans/shopping-list', params={'startDate': '2024-06-01', 'endDate': '2024-06-02'},
                               headers=ALICE)
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data['count'], 2)
        rows = {r['name']: r for r in data['shoppingList']}
        self.assertEqual(rows['Rice']['quantities'], ['200g', '1 cup'])
        self.assertEqual(rows['Rice']['quantity'], '200g, 1 cup')
        self.assertEqual(rows['Eggs']['quantity'], '3')

        empty = self.client.get('/api/plans/shopping-list', params={'startDate': '2025-01-01', 'endDate': '2025-01-31'},
                                headers=ALICE)
        self.assertEqual(empty.json()['shoppingList'], [])

        pdf = self.client.get('/api/plans/shopping-list/pdf', headers=ALICE)
        self.assertEqual(pdf.status_code, 200)
        self.assertEqual(pdf.headers['content-type'], 'application/pdf')
        self.assertTrue(pdf.content.startswith(b'%PDF'))


class TestAccountsApi(ApiTestCase):

    def test_register_login_profile(self):
        resp = self.client.post('/api/auth/register',
                                json={'email': 'ana@example.com', 'password': 'pw', 'name': 'Ana'})
        self.assertEqual(resp.status_code, 201, resp.text)
        user = resp.json()['user']
        self.assertNotIn('passwordHash', user)

        dup = self.client.post('/api/auth/register', json={'email': 'ana@example.com', 'password': 'x'})
        self.assertEqual(dup.status_code, 409)
        self.assertEqual(dup.json()['kind'], 'Conflict')

        self.assertEqual(self.client.post('/api/auth/login',
                                          json={'email': 'ana@example.com', 'password': 'bad'}).status_code, 401)
        ok = self.client.post('/api/auth/login', json={'email': 'ana@example.com', 'password': 'pw'})
        self.assertEqual(ok.status_code, 200)
        self.assertNotIn('passwordHash', ok.json()['user'])
        self.assertNotIn('token', ok.json())

        # the gateway relays the logged-in account as identity headers
        logged_in = ok.json()['user']
        self.assertEqual(logged_in['userId'], user['userId'])
        me = {'X-User-Id': logged_in['userId'], 'X-User-Email': logged_in['email']}
        resp = self.client.put('/api/users/profile', json={'name': 'Ana M.'}, headers=me)
        self.assertEqual(resp.json()['user']['name'], 'Ana M.')
        self.assertEqual(self.client.get('/api/auth/me', headers=me).json()['user']['name'], 'Ana M.')

        resp = self.client.post('/api/auth/change-password',
                                json={'currentPassword': 'pw', 'newPassword': 'pw2'}, headers=me)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.client.post('/api/auth/login',
                                          json={'email': 'ana@example.com', 'password': 'pw2'}).status_code, 200)

        self.assertEqual(self.client.delete('/api/users/account', headers=me).status_code, 200)
        self.assertEqual(self.client.get('/api/users/profile', headers=me).status_code, 404)


if __name__ == '__main__':
    unittest.main()
