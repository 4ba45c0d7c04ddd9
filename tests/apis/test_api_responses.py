import pytest

from dokit._cogs.clients.api import Result, get, head, post, request
from dokit._cogs.clients.errors import APIClientError, APIError, APIServerError, ErrorKind


@pytest.mark.parametrize('status', [200, 201, 202, 299, 400])
async def test_success_for_statuses_up_to_400(api_mock, context, status):
    api_mock('get', '/url', status=status, text='{"a": "b"}')
    result = await get('/url', context=context)
    assert isinstance(result, Result)
    assert result.status == status


@pytest.mark.parametrize('status', [401, 403, 404, 409, 422, 429, 499, 500])
async def test_client_errors_for_statuses_above_400_up_to_500(api_mock, context, status):
    api_mock('get', '/url', status=status, json={'id': 'some_reason', 'message': 'msg'})
    with pytest.raises(APIClientError) as err:
        await get('/url', context=context)
    assert err.value.kind == ErrorKind.CLIENT
    assert err.value.status == status
    assert err.value.response.status == status
    assert err.value.data == {'id': 'some_reason', 'message': 'msg'}
    assert err.value.text is not None
    assert str(err.value) == 'msg'


@pytest.mark.parametrize('status', [501, 502, 503, 504, 599])
async def test_server_errors_for_statuses_above_500(api_mock, context, status):
    api_mock('get', '/url', status=status, json={'id': 'server_error'})
    with pytest.raises(APIServerError) as err:
        await get('/url', context=context)
    assert err.value.kind == ErrorKind.SERVER
    assert err.value.status == status
    assert err.value.data == {'id': 'server_error'}


@pytest.mark.parametrize('status', [404, 500, 503])
async def test_errors_with_unparseable_bodies(api_mock, context, status):
    api_mock('get', '/url', status=status, text='<html>Oops!</html>')
    with pytest.raises(APIError) as err:
        await get('/url', context=context)
    assert err.value.status == status
    assert err.value.text == '<html>Oops!</html>'
    assert err.value.data is None


async def test_errors_carry_headers(api_mock, context):
    api_mock('get', '/url', status=404, json={})
    with pytest.raises(APIClientError) as err:
        await get('/url', context=context)
    assert err.value.headers['Content-Type'].startswith('application/json')


async def test_json_bodies_are_decoded(api_mock, context):
    api_mock('get', '/url', json={'droplets': [{'id': 1}], 'links': {}, 'meta': {'total': 1}})
    result = await get('/url', context=context)
    assert result.data == {'droplets': [{'id': 1}], 'links': {}, 'meta': {'total': 1}}
    assert result.text is not None
    assert result.headers['Content-Type'].startswith('application/json')


async def test_json_bodies_are_decoded_regardless_of_content_type(api_mock, context):
    api_mock('get', '/url', text='{"a": [1, 2]}', content_type='text/plain')
    result = await get('/url', context=context)
    assert result.data == {'a': [1, 2]}


async def test_invalid_json_is_not_an_error(api_mock, context):
    api_mock('get', '/url', text='BAD JSON!')
    result = await get('/url', context=context)
    assert result.status == 200
    assert result.text == 'BAD JSON!'
    assert result.data is None


async def test_empty_bodies_give_no_data(api_mock, context):
    api_mock('delete', '/url', status=204)
    result = await request('delete', '/url', context=context)
    assert result.status == 204
    assert result.text == ''
    assert result.data is None


async def test_head_requests_give_no_data(api_mock, context):
    api_mock('head', '/url', status=200)
    result = await head('/url', context=context)
    assert result.status == 200
    assert result.data is None


async def test_undecodable_bodies_give_no_text(api_mock, context):
    api_mock('get', '/url', body=b'\xff\xfe\xfd')
    result = await get('/url', context=context)
    assert result.status == 200
    assert result.text is None
    assert result.data is None


async def test_echoed_payload_round_trips(aresponses, hostname, context):
    async def echo(request):
        return aresponses.Response(body=await request.read(), content_type='application/json')

    aresponses.add(hostname, '/echo', 'post', echo)
    payload = {'type': 'resize', 'size_gigabytes': 100, 'region': 'nyc1',
               'list': [1, 'two', 3.0, None, True], 'nested': {'deep': {'deeper': []}}}
    result = await post('/echo', payload, context=context)
    assert result.data == payload


async def test_scenario_of_attaching_volume(api_mock, context):
    api_mock('post', '/volumes/v1/actions', status=202,
             json={'action': {'id': 9, 'status': 'in-progress'}})
    result = await post('/volumes/v1/actions',
                        {'type': 'attach', 'droplet_id': 42, 'region': 'nyc1'},
                        context=context)
    assert result.status == 202
    assert result.data['action']['id'] == 9


async def test_scenario_of_missing_droplet(api_mock, context):
    api_mock('get', '/droplets/999', status=404, json={'id': 'not_found'})
    with pytest.raises(APIClientError) as err:
        await get('/droplets/999', context=context)
    assert err.value.kind == ErrorKind.CLIENT
    assert err.value.data['id'] == 'not_found'
