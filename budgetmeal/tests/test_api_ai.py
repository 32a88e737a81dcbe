import unittest
from budgetmeal.api.api_ai import make_scoring_fn


class _Response:
    def __init__(self, text):
        self.output_text = text


class _Responses:
    def __init__(self, text):
        self.text = text
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return _Response(self.text)


class _Client:
    def __init__(self, text):
        self.responses = _Responses(text)


class TestScoringFn(unittest.TestCase):

    def test_no_key_means_no_scorer(self):
        self.assertIsNone(make_scoring_fn(api_key=""))

    def test_scorer_sends_prompt_and_returns_text(self):
        client = _Client('  {"selectedId": 2}\n')
        scorer = make_scoring_fn(model="gpt-4o-mini", client=client)
        self.assertEqual(scorer("pick one"), '{"selectedId": 2}')
        self.assertEqual(client.responses.calls, [{"model": "gpt-4o-mini", "input": "pick one"}])

    def test_empty_output(self):
        scorer = make_scoring_fn(client=_Client(None))
        self.assertEqual(scorer("pick one"), "")


if __name__ == '__main__':
    unittest.main()
