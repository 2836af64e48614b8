#!/usr/bin/env python3
"""
Servidor Local para Desenvolvimento
Simula AWS Lambda + API Gateway localmente usando Flask

Pré-requisitos:
    - Ambiente virtual ativado: source .venv/bin/activate
    - Dependências instaladas: pip install -e ".[dev]"
    - Variáveis de ambiente exportadas (SUPABASE_URL, GEMINI_API_KEY, ...)

Como usar:
    cd lambda
    python local_server.py

Endpoints disponíveis:
    POST http://localhost:8000/api/generate
         Body: { "productName": "...", "productFeatures": "...", "email": "..." }
    GET  http://localhost:8000/api/unsubscribe?email=user@example.com
    POST http://localhost:8000/api/unsubscribe
    GET  http://localhost:8000/privacy
    GET  http://localhost:8000/api/health
"""
import os
import sys
import json
from flask import Flask, request, jsonify
from flask_cors import CORS
from datetime import datetime
from urllib.parse import urlencode

# Garantir que o diretório lambda está no path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# Importar o lambda_handler
from lambda_function import lambda_handler
from shared.config.settings import GENERATION_CREDENTIALS

app = Flask(__name__)
# Habilitar CORS para todos os endpoints e origens (desenvolvimento local)
CORS(app, resources={r"/api/*": {"origins": "*"}}, supports_credentials=True)

LAMBDA_ROUTES = [
    'POST /api/generate',
    'GET  /api/unsubscribe?email={email}',
    'POST /api/unsubscribe',
    'GET  /privacy',
    'GET  /api/privacy',
    'GET  /api/health'
]


class MockLambdaContext:
    """Mock do contexto Lambda para testes locais"""
    def __init__(self):
        self.aws_request_id = f"local-{datetime.now().timestamp()}"
        self.function_name = "local-product-description-generator"
        self.function_version = "$LATEST"
        self.invoked_function_arn = "arn:aws:lambda:local:000000000000:function:local-product-description-generator"
        self.memory_limit_in_mb = "512"
        self.log_group_name = "/aws/lambda/local-product-description-generator"
        self.log_stream_name = "local"

    def get_remaining_time_in_millis(self):
        return 300000  # 5 minutos


def flask_to_lambda_event(flask_request):
    """Converte requisição Flask para evento Lambda/API Gateway"""
    query_string_parameters = dict(flask_request.args.items())
    headers = dict(flask_request.headers.items())

    body = None
    if flask_request.data:
        body = flask_request.data.decode('utf-8')
    elif flask_request.form:
        # Flask consome o corpo form-urlencoded em request.form
        body = urlencode(list(flask_request.form.items()))

    return {
        'resource': flask_request.path,
        'path': flask_request.path,
        'httpMethod': flask_request.method,
        'headers': headers,
        'queryStringParameters': query_string_parameters if query_string_parameters else None,
        'body': body,
        'isBase64Encoded': False,
        'requestContext': {
            'accountId': '000000000000',
            'apiId': 'local',
            'protocol': 'HTTP/1.1',
            'httpMethod': flask_request.method,
            'path': flask_request.path,
            'stage': 'local',
            'requestId': f"local-{datetime.now().timestamp()}",
            'requestTime': datetime.now().isoformat(),
            'requestTimeEpoch': int(datetime.now().timestamp() * 1000),
            'identity': {
                'sourceIp': flask_request.remote_addr,
                'userAgent': flask_request.headers.get('User-Agent', '')
            }
        }
    }


def lambda_to_flask_response(lambda_response):
    """Converte resposta Lambda para resposta Flask"""
    status_code = lambda_response.get('statusCode', 200)

    headers = {}
    for key, values in (lambda_response.get('multiValueHeaders') or {}).items():
        headers[key] = ', '.join(values)
    headers.update(lambda_response.get('headers') or {})

    body = lambda_response.get('body', '')
    content_type = headers.get('Content-Type', '')

    if content_type.startswith('application/json'):
        try:
            return jsonify(json.loads(body)), status_code, headers
        except (json.JSONDecodeError, TypeError):
            pass
    return body, status_code, headers


@app.route('/api/generate', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
@app.route('/api/unsubscribe', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
@app.route('/api/privacy', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
@app.route('/api/health', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
@app.route('/privacy', methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE'])
def proxy_to_lambda():
    """Encaminha a requisição para o lambda_handler"""
    event = flask_to_lambda_event(request)
    context = MockLambdaContext()
    response = lambda_handler(event, context)
    return lambda_to_flask_response(response)


@app.errorhandler(404)
def not_found(error):
    """Handler para rotas não encontradas"""
    return jsonify({
        'error': 'Not Found',
        'message': f"Route {request.path} not found",
        'available_routes': LAMBDA_ROUTES
    }), 404


@app.errorhandler(500)
def internal_error(error):
    """Handler para erros internos"""
    return jsonify({
        'error': 'Internal Server Error',
        'message': str(error)
    }), 500


if __name__ == '__main__':
    # Verificar variáveis de ambiente necessárias
    missing_vars = [var for var in GENERATION_CREDENTIALS if not os.environ.get(var)]

    if missing_vars:
        print(f"⚠️  AVISO: Variáveis de ambiente faltando: {', '.join(missing_vars)}")
        print("POST /api/generate vai responder 500 até que sejam configuradas\n")

    port = int(os.environ.get('PORT', 8000))
    host = os.environ.get('HOST', '0.0.0.0')

    print("=" * 70)
    print("🚀 Servidor Local - Product Description Generator")
    print("=" * 70)
    print(f"\n📍 Rodando em: http://{host}:{port}")
    print("\n📋 Endpoints disponíveis:")
    for route in LAMBDA_ROUTES:
        method, path = route.split(maxsplit=1)
        print(f"   • {method:<4} http://localhost:{port}{path}")
    print("\n💡 Exemplo de uso:")
    print(f"   curl http://localhost:{port}/api/health")
    print("\n" + "=" * 70 + "\n")

    # Rodar servidor Flask
    app.run(
        host=host,
        port=port,
        debug=True,
        use_reloader=True
    )
