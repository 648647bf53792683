"""実行ファイルが依存する DLL の収集"""
