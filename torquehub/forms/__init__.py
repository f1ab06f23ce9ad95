"""Quote document rendering.

Key exports:
    generate_quote_pdf()     : Render a quote record to PDF bytes
    render_quote_for_token() : Look up an order by public token and render it
    QuoteRecord.from_dict()  : Build the renderer input from the order lookup
    ImageFetcher             : Load photo bytes from MEDIA_ROOT or http(s)
    start_expiry_scheduler() : Background sweep cancelling expired DRAFT quotes
"""
