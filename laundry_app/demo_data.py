# ==============================================================================
# DATOS DE DEMOSTRACIÓN
# ==============================================================================
# Catálogo y promociones de ejemplo para LAUNDRY_PRODUCTION_MODE=0.
# Solo se siembran si el archivo correspondiente está vacío.
# ==============================================================================

DEMO_CATALOG = [
    {
        'id': '1', 'name': 'Cuci Kiloan Reguler', 'sku': 'SRV-CKR001',
        'type': 'service', 'price': 3000, 'category': 'laundry',
        'description': 'Layanan cuci kiloan reguler dengan estimasi 3 hari',
        'leadTimeDays': 3, 'status': 'active', 'createdAt': '2024-12-15'
    },
    {
        'id': '2', 'name': 'Cuci Kiloan Express', 'sku': 'SRV-CKE002',
        'type': 'service', 'price': 5000, 'category': 'laundry',
        'description': 'Layanan cuci kiloan express dengan estimasi 1 hari',
        'leadTimeDays': 1, 'status': 'active', 'createdAt': '2024-12-15'
    },
    {
        'id': '3', 'name': 'Setrika Saja', 'sku': 'SRV-STR003',
        'type': 'service', 'price': 2000, 'category': 'laundry',
        'description': 'Layanan setrika saja tanpa cuci',
        'leadTimeDays': 2, 'status': 'active', 'createdAt': '2024-12-16'
    },
    {
        'id': '4', 'name': 'Deterjen Cair Premium', 'sku': 'PRD-DCP004',
        'type': 'product', 'price': 0, 'category': 'detergent',
        'description': 'Deterjen cair premium untuk pakaian sensitif',
        'hasVariations': True,
        'variations': [
            {'id': 'var1', 'name': 'Ukuran 500ml', 'sku': 'PRD-DCP004-V01', 'price': 25000, 'stock': 15},
            {'id': 'var2', 'name': 'Ukuran 1L', 'sku': 'PRD-DCP004-V02', 'price': 45000, 'stock': 8},
            {'id': 'var3', 'name': 'Ukuran 2L', 'sku': 'PRD-DCP004-V03', 'price': 80000, 'stock': 5},
        ],
        'status': 'active', 'createdAt': '2024-12-20'
    },
    {
        'id': '5', 'name': 'Parfum Laundry', 'sku': 'PRD-PFM005',
        'type': 'product', 'price': 0, 'category': 'perfume',
        'description': 'Parfum laundry dengan berbagai varian aroma',
        'hasVariations': True,
        'variations': [
            {'id': 'var4', 'name': 'Aroma Lavender', 'sku': 'PRD-PFM005-V01', 'price': 18000, 'stock': 12},
            {'id': 'var5', 'name': 'Aroma Lemon', 'sku': 'PRD-PFM005-V02', 'price': 18000, 'stock': 10},
            {'id': 'var6', 'name': 'Aroma Vanilla', 'sku': 'PRD-PFM005-V03', 'price': 20000, 'stock': 0},
        ],
        'status': 'active', 'createdAt': '2024-12-20'
    },
]

DEMO_PROMOTIONS = [
    {
        'id': '1', 'code': 'DISKON10', 'title': 'Diskon 10%',
        'description': 'Diskon 10% untuk semua layanan',
        'type': 'percentage', 'value': 10, 'minOrder': 0,
        'status': 'active', 'usageCount': 0, 'createdAt': '2025-01-01'
    },
    {
        'id': '2', 'code': 'DISKON20', 'title': 'Diskon 20%',
        'description': 'Diskon 20% untuk semua layanan',
        'type': 'percentage', 'value': 20, 'minOrder': 0,
        'status': 'active', 'usageCount': 0, 'createdAt': '2025-01-01'
    },
    {
        'id': '3', 'code': 'POTONGAN10K', 'title': 'Potongan Rp 10.000',
        'description': 'Potongan langsung Rp 10.000',
        'type': 'fixed', 'value': 10000, 'minOrder': 0,
        'status': 'active', 'usageCount': 0, 'createdAt': '2025-01-01'
    },
    {
        'id': '4', 'code': 'WELCOME20', 'title': 'Pelanggan Baru',
        'description': 'Diskon 20% untuk pelanggan baru. Minimal order Rp 30.000.',
        'type': 'percentage', 'value': 20, 'minOrder': 30000,
        'startDate': '2025-01-01', 'endDate': '2025-12-31',
        'status': 'active', 'usageCount': 78, 'createdAt': '2024-12-20'
    },
    {
        'id': '5', 'code': 'MERDEKA45', 'title': 'Promo Kemerdekaan',
        'description': 'Diskon 45% untuk memperingati hari kemerdekaan. Minimal order Rp 45.000.',
        'type': 'percentage', 'value': 45, 'minOrder': 45000, 'maxDiscount': 100000,
        'startDate': '2024-08-17', 'endDate': '2024-08-31',
        'status': 'expired', 'usageCount': 120, 'maxUsage': 200, 'createdAt': '2024-08-01'
    },
]
