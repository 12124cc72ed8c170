# Dot IVR Log
# IVR call log diagnosis from incident emails

import sys
import os
import threading

# Add parent directory to path for shared imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from flask import Flask, request, jsonify, current_app

from shared import (
    MAX_CONTENT_LENGTH,
    PORT,
    IvrLogAnalyzer,
    build_anthropic_client,
    decode_image_payload
)


def _load_prompt(name):
    path = os.path.join(os.path.dirname(__file__), name)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


# Load prompts
EXTRACT_PROMPT = _load_prompt('extract_prompt.txt')
ANALYSIS_PROMPT = _load_prompt('analysis_prompt.txt')


_analyzer_lock = threading.Lock()


def get_analyzer():
    """Return the app's analyzer, building the Claude client on first use"""
    analyzer = current_app.config.get('ANALYZER')
    if analyzer is not None:
        return analyzer
    
    # Concurrent first requests must share one client
    with _analyzer_lock:
        analyzer = current_app.config.get('ANALYZER')
        if analyzer is None:
            analyzer = IvrLogAnalyzer(
                client=build_anthropic_client(),
                extract_prompt=EXTRACT_PROMPT,
                analysis_prompt=ANALYSIS_PROMPT
            )
            current_app.config['ANALYZER'] = analyzer
    return analyzer


def create_app(analyzer=None):
    """Flask application factory."""
    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH
    app.config['ANALYZER'] = analyzer

    @app.route('/analyze-ivr-log', methods=['POST'])
    def analyze_ivr_log():
        """Diagnose an IVR incident.
        
        Accepts:
            - mailContent: The incident email body
            - logImageBase64: Call log screenshot, bare base64 or data URL
            - logText: Raw IVR trace text
        
        Returns:
            - success: True
            - channelNumber: Channel Claude found in the email (or UNKNOWN)
            - analysis: Claude's diagnosis
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({'error': 'Request body must be a JSON object'}), 400
        
        mail_content = data.get('mailContent', '')
        log_image = data.get('logImageBase64', '')
        log_text = data.get('logText', '')
        if log_text is None:
            log_text = ''
        if not isinstance(log_text, str):
            return jsonify({'error': 'logText must be a string'}), 400
        
        if not mail_content or not isinstance(mail_content, str):
            return jsonify({'error': 'No mail content provided'}), 400
        
        if not log_image or not isinstance(log_image, str):
            return jsonify({'error': 'No log image provided'}), 400
        
        try:
            image = decode_image_payload(log_image)
        except ValueError as e:
            return jsonify({
                'error': 'Invalid log image',
                'details': str(e)
            }), 400
        
        try:
            result = get_analyzer().analyze(mail_content, image, log_text)
            
            return jsonify({
                'success': True,
                'channelNumber': result.channel_number,
                'analysis': result.analysis
            })
            
        except Exception as e:
            print(f"Error analysing IVR log: {e!r}")
            return jsonify({
                'error': 'Failed to analyze IVR log',
                'details': str(e)
            }), 500

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({
            'status': 'healthy',
            'service': 'Dot IVR Log',
            'version': '1.0'
        })

    return app


app = create_app()


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=PORT)
